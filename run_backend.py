#!/usr/bin/env python
"""Script to run the Mini Todo API server."""
import uvicorn

from todo_api.config import HOST, LOG_LEVEL, PORT
from todo_api.logging_setup import setup_logging


def main() -> None:
    setup_logging(LOG_LEVEL)
    uvicorn.run(
        "todo_api.main:app",
        host=HOST,
        port=PORT,
        log_config=None,  # keep the handlers installed by setup_logging
    )


if __name__ == "__main__":
    main()

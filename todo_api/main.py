import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from . import __version__
from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    CORS_ORIGINS,
    DEFAULT_SECRET_KEY,
    SECRET_KEY,
)
from .database import Database
from .error_handlers import register_error_handlers
from .routers import auth, tasks
from .security import AccessGate, TokenService

logger = logging.getLogger(__name__)


def create_app(
    db: Optional[Database] = None,
    tokens: Optional[TokenService] = None,
) -> FastAPI:
    """Build the API with its own stores and token service.

    Tests pass their own ``db``/``tokens``; the server uses the configured defaults.
    """
    if tokens is None:
        if SECRET_KEY == DEFAULT_SECRET_KEY:
            logger.warning("SECRET_KEY is not set; using the insecure development default")
        tokens = TokenService(SECRET_KEY, expire_minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    if db is None:
        db = Database()

    app = FastAPI(
        title="Mini Todo API",
        description="Multi-user todo list API with JWT bearer authentication",
        version=__version__,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.db = db
    app.state.tokens = tokens
    app.state.gate = AccessGate(tokens, user_exists=db.users.exists)

    register_error_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(tasks.router, prefix="/todos", tags=["todos"])

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return "Mini Todo API — see /auth and /todos"

    @app.get("/health")
    def health_check(request: Request):
        state_db: Database = request.app.state.db
        return {
            "status": "healthy",
            "users": state_db.users.count(),
            "tasks": state_db.tasks.count(),
        }

    return app


app = create_app()

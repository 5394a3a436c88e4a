from dataclasses import dataclass, field

from fastapi import Request

from .config import BCRYPT_ROUNDS
from .stores import CredentialStore, TaskStore


@dataclass
class Database:
    """Process-lifetime storage: one credential store and one task store.

    Nothing is written to disk; a restart starts from empty collections.
    """
    users: CredentialStore = field(default_factory=lambda: CredentialStore(bcrypt_rounds=BCRYPT_ROUNDS))
    tasks: TaskStore = field(default_factory=TaskStore)


def get_db(request: Request) -> Database:
    """Dependency to get the application's database."""
    return request.app.state.db

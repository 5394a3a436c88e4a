import logging
import threading
from typing import Dict, Optional

from ..errors import DuplicateUsernameError, InvalidCredentialsError, InvalidInputError
from ..models import User
from ..security import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    In-memory user store.

    Thread-safety:
    - every read-check-then-write runs under ``self._lock``
    - bcrypt work (hash and check) always runs outside the lock
    """

    def __init__(self, bcrypt_rounds: int = 10) -> None:
        self._bcrypt_rounds = bcrypt_rounds
        self._users: Dict[int, User] = {}
        self._ids_by_username: Dict[str, int] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    @staticmethod
    def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
        if not username or not password:
            raise InvalidInputError("username and password required")

    def register(self, username: Optional[str], password: Optional[str]) -> User:
        """Create a user with a fresh id. Raises on empty fields or a taken username."""
        self._require_credentials(username, password)

        with self._lock:
            if username in self._ids_by_username:
                raise DuplicateUsernameError(username)

        password_hash = get_password_hash(password, rounds=self._bcrypt_rounds)

        with self._lock:
            # Another request may have taken the name while we were hashing.
            if username in self._ids_by_username:
                raise DuplicateUsernameError(username)
            user = User(id=self._next_id, username=username, password_hash=password_hash)
            self._next_id += 1
            self._users[user.id] = user
            self._ids_by_username[username] = user.id

        logger.info("Registered user id=%s username=%s", user.id, username)
        return user.model_copy()

    def authenticate(self, username: Optional[str], password: Optional[str]) -> User:
        """Return the user if the password matches its verifier."""
        self._require_credentials(username, password)

        with self._lock:
            user_id = self._ids_by_username.get(username)
            user = self._users.get(user_id) if user_id is not None else None

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login for username=%s", username)
            raise InvalidCredentialsError()

        logger.info("User id=%s logged in", user.id)
        return user.model_copy()

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
        return user.model_copy() if user is not None else None

    def exists(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._users

    def count(self) -> int:
        with self._lock:
            return len(self._users)

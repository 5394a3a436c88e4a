from .tasks import TaskStore
from .users import CredentialStore

__all__ = ["CredentialStore", "TaskStore"]

from pydantic import BaseModel


class User(BaseModel):
    """User record held by the credential store.

    ``password_hash`` is a bcrypt verifier and never leaves the service.
    """

    id: int
    username: str
    password_hash: str

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserCredentials(BaseModel):
    """Body of the register and login endpoints.

    Both fields are optional here so the credential store reports missing
    values as ``InvalidInputError`` rather than a schema error.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class User(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    token: str
    user: User


class TokenData(BaseModel):
    """Identity resolved from a verified token."""
    user_id: int
    username: str

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from ..database import Database, get_db
from ..schemas.user import AuthResponse, TokenData, User as UserSchema, UserCredentials
from ..security import AccessGate, TokenService

router = APIRouter()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.gate


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    gate: AccessGate = Depends(get_access_gate),
) -> TokenData:
    """Resolve the caller from the ``Authorization: Bearer <token>`` header.

    Raises UnauthorizedError before the route body runs if anything about the
    credential is wrong.
    """
    return gate.authorize(authorization)


@router.post("/register", response_model=AuthResponse)
def register(
    credentials: UserCredentials,
    db: Database = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new user account and return a token for it."""
    user = db.users.register(credentials.username, credentials.password)
    token = tokens.issue(user.id, user.username)
    return {"token": token, "user": UserSchema.model_validate(user)}


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserCredentials,
    db: Database = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Sign in and get a JWT token."""
    user = db.users.authenticate(credentials.username, credentials.password)
    token = tokens.issue(user.id, user.username)
    return {"token": token, "user": UserSchema.model_validate(user)}


@router.get("/me", response_model=UserSchema)
def read_users_me(current_user: TokenData = Depends(get_current_user)):
    """Get current user information."""
    return {"id": current_user.user_id, "username": current_user.username}

"""
Authentication router with register, login, logout, refresh and profile endpoints.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.orm import Session

from clubledger.core.deps import bearer_scheme, get_current_user
from clubledger.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
    blacklist_token,
    is_token_blacklisted,
    purge_expired_tokens,
    token_expiry,
)
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.schemas.auth import (
    ProfileUpdate,
    UserRegister,
    UserLogin,
    Token,
    TokenRefresh,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(user: User) -> Token:
    return Token(
        access_token=create_access_token(subject=str(user.id)),
        refresh_token=create_refresh_token(subject=str(user.id)),
    )


def _user_from_subject(subject: str | None, db: Session) -> User | None:
    try:
        user_id = UUID(subject or "")
    except ValueError:
        return None
    return db.get(User, user_id)


def _blacklist_until_expiry(token: str, payload: dict, db: Session) -> None:
    expires_at = token_expiry(payload)
    if expires_at is not None:
        blacklist_token(token, expires_at, db, token_type=payload.get("type", "access"))


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)) -> Token:
    """
    Register a new user account.
    Returns access and refresh tokens on success.
    """
    existing_user = db.execute(select(User).where(User.email == user_data.email)).scalar_one_or_none()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    new_user = User(
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        full_name=user_data.full_name,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    return _issue_tokens(new_user)


@router.post("/login", response_model=Token)
def login(user_data: UserLogin, db: Session = Depends(get_db)) -> Token:
    """
    Authenticate user and return tokens.
    """
    user = db.execute(select(User).where(User.email == user_data.email)).scalar_one_or_none()
    if not user or not verify_password(user_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return _issue_tokens(user)


@router.post("/refresh", response_model=Token)
def refresh(token_data: TokenRefresh, db: Session = Depends(get_db)) -> Token:
    """
    Exchange a refresh token for a new access and refresh token.

    The old refresh token is blacklisted, so each refresh token works once.
    """
    old_token = token_data.refresh_token
    payload = decode_token(old_token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    if is_token_blacklisted(old_token, db):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token has already been used. Please log in again.",
        )

    user = _user_from_subject(payload.get("sub"), db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    _blacklist_until_expiry(old_token, payload, db)
    return _issue_tokens(user)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(
    current_user: User = Depends(get_current_user),
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> dict:
    """
    Revoke the access token used for this request.
    Client should discard its refresh token as well.
    """
    token = credentials.credentials
    purge_expired_tokens(db)
    _blacklist_until_expiry(token, decode_token(token) or {}, db)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)) -> User:
    """
    Get the current authenticated user's profile.
    """
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_me(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    if profile.full_name is not None:
        current_user.full_name = profile.full_name
    db.commit()
    db.refresh(current_user)
    return current_user

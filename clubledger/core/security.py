"""
Password hashing, JWT issuance and token revocation.

Tokens carry `sub` (user id), `type` ("access" or "refresh"), `exp` and a
random `jti` so that two tokens minted in the same second still differ.
Revoked tokens are stored by SHA-256 hash only.
"""
from datetime import datetime, timedelta, timezone
from typing import Any
import hashlib
import uuid

import bcrypt
from jose import jwt, JWTError
from sqlalchemy import delete
from sqlalchemy.orm import Session

from clubledger.core.config import get_settings

settings = get_settings()


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def _create_token(subject: str | Any, token_type: str, lifetime: timedelta) -> str:
    claims = {
        "sub": str(subject),
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _create_token(subject, "access", lifetime)


def create_refresh_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    lifetime = expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _create_token(subject, "refresh", lifetime)


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Returns payload or None if invalid or expired."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def token_expiry(payload: dict) -> datetime | None:
    exp_timestamp = payload.get("exp")
    if not exp_timestamp:
        return None
    return datetime.fromtimestamp(exp_timestamp, tz=timezone.utc)


def is_token_blacklisted(token: str, db: Session) -> bool:
    from clubledger.models.token_blacklist import TokenBlacklist

    return db.get(TokenBlacklist, hash_token(token)) is not None


def blacklist_token(token: str, expires_at: datetime, db: Session, token_type: str = "access") -> None:
    """
    Revoke a token until `expires_at` and commit.

    Revoking an already revoked token is a no-op.
    """
    from clubledger.models.token_blacklist import TokenBlacklist

    token_hash_value = hash_token(token)
    if db.get(TokenBlacklist, token_hash_value) is None:
        db.add(TokenBlacklist(token_hash=token_hash_value, token_type=token_type, expires_at=expires_at))
        db.commit()


def purge_expired_tokens(db: Session) -> int:
    """Delete blacklist rows whose token has expired anyway. Does not commit."""
    from clubledger.models.token_blacklist import TokenBlacklist

    result = db.execute(
        delete(TokenBlacklist).where(TokenBlacklist.expires_at < datetime.now(timezone.utc))
    )
    return result.rowcount or 0

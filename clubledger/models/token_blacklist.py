"""
Revoked JWTs.

A refresh token lands here the moment it is exchanged, an access token when
its owner logs out. Rows past `expires_at` are dead weight and are purged.
"""
from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.sql import func

from clubledger.db.base import Base


class TokenBlacklist(Base):
    __tablename__ = "token_blacklist"

    token_hash = Column(String(64), primary_key=True)  # sha256 hex of the token
    token_type = Column(String(10), nullable=False, default="access")
    blacklisted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_token_blacklist_expires', 'expires_at'),
    )

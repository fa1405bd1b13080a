"""
Security utilities for viewer identification.

This module provides:
- JWT access token generation carrying the viewer's gating preferences
- Access token verification
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from app.config import settings


@dataclass(frozen=True)
class AccessTokenClaims:
    """Viewer claims decoded from a valid access token"""

    user_id: int
    blur_nsfw: bool
    is_moderator: bool


def create_access_token(
    user_id: int,
    blur_nsfw: bool = True,
    is_moderator: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: The user ID to encode in the token
        blur_nsfw: The user's preference for blurring adult content
        is_moderator: Whether the user moderates content
        expires_delta: Optional custom expiration time (defaults to settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    expire = datetime.now(UTC) + expires_delta

    payload = {
        "sub": str(user_id),  # "sub" (subject) is standard JWT claim
        "exp": expire,  # "exp" (expiration) is standard JWT claim
        "type": "access",  # Custom claim to distinguish token types
        "blur_nsfw": blur_nsfw,
        "is_moderator": is_moderator,
    }

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> AccessTokenClaims | None:
    """
    Verify and decode a JWT access token.

    Args:
        token: The JWT token to verify

    Returns:
        Decoded claims if token is valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": True, "verify_signature": True},
        )

        if payload.get("type") != "access":
            return None

        user_id: str | None = payload.get("sub")
        if user_id is None:
            return None

        return AccessTokenClaims(
            user_id=int(user_id),
            blur_nsfw=bool(payload.get("blur_nsfw", True)),
            is_moderator=bool(payload.get("is_moderator", False)),
        )

    except jwt.InvalidTokenError:
        # Any signature, claim or format failure
        return None
    except (ValueError, TypeError):
        return None

"""
Viewer schema - who is looking at the images
"""

from pydantic import BaseModel, ConfigDict

from app.config import settings
from app.core.security import AccessTokenClaims


class Viewer(BaseModel):
    """
    Viewer state resolved from the identity provider.

    Anonymous viewers always blur adult content by default and are never
    moderators.
    """

    authenticated: bool = False
    user_id: int | None = None
    blur_nsfw: bool = True
    is_moderator: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls(blur_nsfw=settings.DEFAULT_BLUR_NSFW)

    @classmethod
    def from_claims(cls, claims: AccessTokenClaims) -> "Viewer":
        return cls(
            authenticated=True,
            user_id=claims.user_id,
            blur_nsfw=claims.blur_nsfw,
            is_moderator=claims.is_moderator,
        )

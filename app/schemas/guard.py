"""
Pydantic schemas for Image Guard endpoints
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.image import ImageDescriptor


class ConnectionEntityType(str, Enum):
    """Kinds of entity that can own a group of images"""

    model = "model"
    modelVersion = "modelVersion"
    review = "review"
    user = "user"


class ConnectionIdentity(BaseModel):
    """
    Grouping key for images under one logical owner (a model card, a review...).

    Toggling a connection reveals or hides every adult image rendered under it.
    """

    entity_type: ConnectionEntityType
    entity_id: int

    model_config = ConfigDict(frozen=True)


class Disposition(str, Enum):
    """Outcome of evaluating an image against the gating rules"""

    VISIBLE = "visible"
    HIDDEN = "hidden"


class GuardStatus(BaseModel):
    """Tagged variant handed to a render strategy"""

    status: Disposition

    model_config = ConfigDict(frozen=True)


class AffordanceState(str, Enum):
    """States of the per-image reveal badge"""

    NOT_APPLICABLE = "not_applicable"
    LOCKED_PENDING_AUTH = "locked_pending_auth"
    INTERACTIVE_HIDDEN = "interactive_hidden"
    INTERACTIVE_SHOWN = "interactive_shown"


class GateDecision(str, Enum):
    """What a click on the reveal badge should do"""

    ALLOW = "allow"
    PROMPT = "prompt"
    IGNORE = "ignore"


# Requests


class GuardRequest(BaseModel):
    """A rendering pass over a list of images"""

    images: list[ImageDescriptor | None]
    connect: ConnectionIdentity | None = None
    path: str = "/"


class ToggleRequest(BaseModel):
    """A click on one image's reveal badge"""

    image: ImageDescriptor
    connect: ConnectionIdentity | None = None
    path: str = "/"


class RevealRequest(BaseModel):
    """Reveal every adult image of a rendering pass"""

    images: list[ImageDescriptor | None]
    connect: ConnectionIdentity | None = None
    path: str = "/"


# Responses


class BadgeResponse(BaseModel):
    """How the reveal badge for one image should behave"""

    rendered: bool
    toggleable: bool
    state: AffordanceState
    target: str
    stop_propagation: bool


class GuardedImageResponse(BaseModel):
    """Evaluation of one image"""

    image_id: int
    nsfw: bool = Field(description="Adult content after applying the viewer's blur preference")
    image_nsfw: bool = Field(description="Intrinsic adult content flag")
    disposition: Disposition
    show_content: bool
    show_placeholder: bool
    badge: BadgeResponse
    image: ImageDescriptor


class GuardResponse(BaseModel):
    """Evaluation of a whole rendering pass"""

    images: list[GuardedImageResponse]
    connect: ConnectionIdentity | None = None


class LoginPrompt(BaseModel):
    """Inline sign-in prompt shown to anonymous viewers"""

    opened: bool
    message: str
    login_url: str


class ToggleResponse(BaseModel):
    """Result of a badge click"""

    decision: GateDecision
    disposition: Disposition
    stop_propagation: bool
    prompt: LoginPrompt | None = None


class RevealResponse(BaseModel):
    """Result of a reveal-all request"""

    decision: GateDecision
    revealed_ids: list[int] = Field(default_factory=list)
    prompt: LoginPrompt | None = None


class StoreSnapshotResponse(BaseModel):
    """Current reveal flags held for the session"""

    images: dict[int, bool]
    connections: dict[str, bool]

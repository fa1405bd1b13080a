"""
Pydantic schemas for API responses and requests
"""
from app.schemas.guard import (
    AffordanceState,
    BadgeResponse,
    ConnectionEntityType,
    ConnectionIdentity,
    Disposition,
    GateDecision,
    GuardedImageResponse,
    GuardRequest,
    GuardResponse,
    GuardStatus,
    LoginPrompt,
    RevealRequest,
    RevealResponse,
    StoreSnapshotResponse,
    ToggleRequest,
    ToggleResponse,
)
from app.schemas.image import ImageAnalysis, ImageDescriptor, ImageMeta
from app.schemas.viewer import Viewer

__all__ = [
    # Guard schemas
    "AffordanceState",
    "BadgeResponse",
    "ConnectionEntityType",
    "ConnectionIdentity",
    "Disposition",
    "GateDecision",
    "GuardedImageResponse",
    "GuardRequest",
    "GuardResponse",
    "GuardStatus",
    "LoginPrompt",
    "RevealRequest",
    "RevealResponse",
    "StoreSnapshotResponse",
    "ToggleRequest",
    "ToggleResponse",
    # Image schemas
    "ImageAnalysis",
    "ImageDescriptor",
    "ImageMeta",
    # Viewer
    "Viewer",
]

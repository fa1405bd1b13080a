"""Render slots built on the gating evaluator.

``protected_content`` and ``placeholder`` are exact complements for adult
images. Non-adult images always resolve to protected content.
"""

from typing import TypeVar

from app.schemas.guard import Disposition
from app.services.image_guard import GuardContext, GuardedImage, get_guard_context

T = TypeVar("T")


def protected_content(image: GuardedImage, ctx: GuardContext | None = None) -> bool:
    """True when the real image may be rendered."""
    context = get_guard_context(ctx)
    return context.disposition(image) is Disposition.VISIBLE


def placeholder(image: GuardedImage, ctx: GuardContext | None = None) -> bool:
    """True when the blurred placeholder must be rendered instead."""
    context = get_guard_context(ctx)
    if not image.nsfw:
        return False
    return context.disposition(image) is Disposition.HIDDEN


def safe_slot(image: GuardedImage, children: T, ctx: GuardContext | None = None) -> T | None:
    """Return ``children`` only when the image is shown."""
    return children if protected_content(image, ctx) else None


def unsafe_slot(image: GuardedImage, children: T, ctx: GuardContext | None = None) -> T | None:
    """Return ``children`` only when the image is hidden."""
    return children if placeholder(image, ctx) else None

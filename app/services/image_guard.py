"""
Image guard - gating evaluator.

Decides whether an adult image is shown or hidden for the current viewer:
- Non-adult images (after the viewer's blur preference) are always visible
- A connection override, when present, wins over the per-image override
- With neither override set, adult images stay hidden

A GuardContext is built once per rendering pass and never mutated. Nested
consumers can either receive it explicitly or read the ambient one set by
``guard_context()``; reading it outside such a block is a programming error.
"""

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TypeVar

from app.schemas.guard import ConnectionIdentity, Disposition, GuardStatus
from app.schemas.image import ImageDescriptor
from app.schemas.viewer import Viewer
from app.services.visibility_store import StoreSnapshot, VisibilityStore, connection_key

T = TypeVar("T")


class ContextNotEstablishedError(RuntimeError):
    """Raised when guard consumers run outside an active GuardContext."""


@dataclass(frozen=True)
class GuardedImage:
    """An image with its gating flags resolved for one viewer"""

    id: int
    nsfw: bool  # effective: intrinsic flag AND viewer blurs adult content
    image_nsfw: bool  # intrinsic flag
    descriptor: ImageDescriptor


@dataclass(frozen=True)
class GuardContext:
    """Everything one rendering pass needs to evaluate its images"""

    images: tuple[GuardedImage, ...]
    viewer: Viewer
    store: VisibilityStore
    connect: ConnectionIdentity | None = None

    def disposition(self, image: GuardedImage) -> Disposition:
        return evaluate(image, self.connect, self.store.snapshot())


def build_guard_context(
    images: Iterable[ImageDescriptor | None],
    viewer: Viewer,
    store: VisibilityStore,
    connect: ConnectionIdentity | None = None,
) -> GuardContext:
    """
    Resolve an image list into a GuardContext.

    Missing entries and images without an id are skipped.
    """
    guarded = tuple(
        GuardedImage(
            id=image.id,
            nsfw=image.nsfw and viewer.blur_nsfw,
            image_nsfw=image.nsfw,
            descriptor=image,
        )
        for image in images
        if image is not None and image.id
    )
    return GuardContext(images=guarded, viewer=viewer, store=store, connect=connect)


def evaluate(
    image: GuardedImage,
    connect: ConnectionIdentity | None,
    snapshot: StoreSnapshot,
) -> Disposition:
    """
    Compute the disposition of one image against a store snapshot.

    Args:
        image: Image with its effective adult flag resolved
        connect: Connection the image is rendered under, if any
        snapshot: Store state to evaluate against

    Returns:
        Disposition.VISIBLE or Disposition.HIDDEN
    """
    if not image.nsfw:
        return Disposition.VISIBLE

    group = snapshot.connection_reveals.get(connection_key(connect)) if connect else None
    revealed = group if group is not None else snapshot.image_reveals.get(image.id, False)

    return Disposition.VISIBLE if revealed else Disposition.HIDDEN


_current_guard: ContextVar[GuardContext | None] = ContextVar("guard_context", default=None)


@contextmanager
def guard_context(ctx: GuardContext) -> Iterator[GuardContext]:
    """Make ``ctx`` the ambient guard context for the enclosed block."""
    token = _current_guard.set(ctx)
    try:
        yield ctx
    finally:
        _current_guard.reset(token)


def get_guard_context(ctx: GuardContext | None = None) -> GuardContext:
    """
    Return ``ctx`` if given, else the ambient guard context.

    Raises:
        ContextNotEstablishedError: If neither is available
    """
    if ctx is not None:
        return ctx
    current = _current_guard.get()
    if current is None:
        raise ContextNotEstablishedError(
            "Image guard context not established. Wrap the call in guard_context() first."
        )
    return current


def render_images(
    render: Callable[[GuardedImage, int, GuardStatus], T],
    ctx: GuardContext | None = None,
) -> list[T]:
    """
    Call ``render`` once per image with its current status.

    The whole pass reads a single store snapshot so every image is
    rendered against the same state.
    """
    context = get_guard_context(ctx)
    snapshot = context.store.snapshot()
    return [
        render(image, index, GuardStatus(status=evaluate(image, context.connect, snapshot)))
        for index, image in enumerate(context.images)
    ]

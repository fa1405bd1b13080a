"""
Image Guard API endpoints

Pages post the images of a rendering pass and get back, for each image,
whether to show it, whether to show the placeholder, and how its badge
behaves. Badge clicks are posted back and go through the disclosure gate.
"""

from fastapi import APIRouter, HTTPException

from app.api.dependencies import GuardSessionDep, ViewerDep
from app.schemas.guard import (
    BadgeResponse,
    GuardedImageResponse,
    GuardRequest,
    GuardResponse,
    RevealRequest,
    RevealResponse,
    StoreSnapshotResponse,
    ToggleRequest,
    ToggleResponse,
)
from app.services.disclosure_gate import describe_affordance
from app.services.image_guard import GuardContext, GuardedImage, build_guard_context, guard_context
from app.services.render_policy import placeholder, protected_content

router = APIRouter(prefix="/guard", tags=["guard"])


def _guarded_image_response(image: GuardedImage, ctx: GuardContext) -> GuardedImageResponse:
    affordance = describe_affordance(image, ctx)
    return GuardedImageResponse(
        image_id=image.id,
        nsfw=image.nsfw,
        image_nsfw=image.image_nsfw,
        disposition=ctx.disposition(image),
        show_content=protected_content(image, ctx),
        show_placeholder=placeholder(image, ctx),
        badge=BadgeResponse(
            rendered=affordance.rendered,
            toggleable=affordance.toggleable,
            state=affordance.state,
            target=affordance.target,
            stop_propagation=affordance.stop_propagation,
        ),
        image=image.descriptor,
    )


@router.post("/images", response_model=GuardResponse)
async def evaluate_images(
    request: GuardRequest,
    viewer: ViewerDep,
    session: GuardSessionDep,
) -> GuardResponse:
    """
    Evaluate every image of a rendering pass.

    Images without an id are dropped from the result.
    """
    ctx = build_guard_context(request.images, viewer, session.store, request.connect)
    with guard_context(ctx):
        images = [_guarded_image_response(image, ctx) for image in ctx.images]
    return GuardResponse(images=images, connect=ctx.connect)


@router.post("/toggle", response_model=ToggleResponse)
async def toggle_image(
    request: ToggleRequest,
    viewer: ViewerDep,
    session: GuardSessionDep,
) -> ToggleResponse:
    """
    Handle a click on an image's adult-content badge.

    Anonymous viewers receive a sign-in prompt and nothing is revealed.
    """
    ctx = build_guard_context([request.image], viewer, session.store, request.connect)
    if not ctx.images:
        raise HTTPException(
            status_code=422,
            detail="Image id is required",
        )

    outcome = session.gate.click(ctx.images[0], request.path, ctx)
    return ToggleResponse(
        decision=outcome.decision,
        disposition=outcome.disposition,
        stop_propagation=outcome.stop_propagation,
        prompt=outcome.prompt,
    )


@router.post("/reveal", response_model=RevealResponse)
async def reveal_images(
    request: RevealRequest,
    viewer: ViewerDep,
    session: GuardSessionDep,
) -> RevealResponse:
    """
    Reveal every adult image of a rendering pass.
    """
    ctx = build_guard_context(request.images, viewer, session.store, request.connect)
    outcome = session.gate.reveal_all(request.path, ctx)
    return RevealResponse(
        decision=outcome.decision,
        revealed_ids=outcome.revealed_ids,
        prompt=outcome.prompt,
    )


@router.get("/state", response_model=StoreSnapshotResponse)
async def get_state(session: GuardSessionDep) -> StoreSnapshotResponse:
    """
    Get the reveal flags currently held for this session.
    """
    snapshot = session.store.snapshot()
    return StoreSnapshotResponse(
        images=dict(snapshot.image_reveals),
        connections=dict(snapshot.connection_reveals),
    )

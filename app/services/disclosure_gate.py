"""
Disclosure gate.

Mediates clicks on the adult-content badge:
- Non-adult images have nothing to disclose, so clicks do nothing
- Anonymous viewers get a sign-in prompt instead of a reveal; the store is untouched
- Signed-in viewers toggle the connection when the pass has one, else the image

Moderators also see the badge on intrinsically adult images their own
preferences would not blur, as a marker only.

Every click on a rendered badge stops propagation so the element under the
badge is never activated.
"""

from dataclasses import dataclass, field
from urllib.parse import quote

from app.config import GuardTarget, settings
from app.core.logging import get_logger
from app.schemas.guard import AffordanceState, Disposition, GateDecision, LoginPrompt
from app.services.image_guard import GuardContext, GuardedImage, get_guard_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class Affordance:
    """How the badge of one image behaves for the current viewer"""

    rendered: bool
    toggleable: bool
    state: AffordanceState
    target: str
    stop_propagation: bool


@dataclass(frozen=True)
class ClickOutcome:
    decision: GateDecision
    disposition: Disposition
    stop_propagation: bool
    prompt: LoginPrompt | None = None


@dataclass(frozen=True)
class RevealOutcome:
    decision: GateDecision
    revealed_ids: list[int] = field(default_factory=list)
    prompt: LoginPrompt | None = None


def build_login_url(path: str) -> str:
    """Sign-in URL that brings the viewer back to ``path`` afterwards."""
    return f"{settings.LOGIN_PATH}?returnUrl={quote(path, safe='/')}"


def describe_affordance(image: GuardedImage, ctx: GuardContext | None = None) -> Affordance:
    context = get_guard_context(ctx)
    viewer = context.viewer

    rendered = image.nsfw or (viewer.is_moderator and image.image_nsfw)
    toggleable = image.nsfw and viewer.authenticated and viewer.blur_nsfw

    if not image.nsfw:
        state = AffordanceState.NOT_APPLICABLE
    elif not viewer.authenticated:
        state = AffordanceState.LOCKED_PENDING_AUTH
    elif context.disposition(image) is Disposition.VISIBLE:
        state = AffordanceState.INTERACTIVE_SHOWN
    else:
        state = AffordanceState.INTERACTIVE_HIDDEN

    return Affordance(
        rendered=rendered,
        toggleable=toggleable,
        state=state,
        target=GuardTarget.CONNECTION if context.connect else GuardTarget.IMAGE,
        stop_propagation=rendered,
    )


def decide_click(affordance: Affordance) -> GateDecision:
    """Pure click policy for a badge."""
    if not affordance.rendered:
        return GateDecision.IGNORE
    if affordance.state is AffordanceState.LOCKED_PENDING_AUTH:
        return GateDecision.PROMPT
    if affordance.toggleable:
        return GateDecision.ALLOW
    return GateDecision.IGNORE


class DisclosureGate:
    """
    Applies click decisions for one viewer session.

    Tracks which images currently have their sign-in prompt open; the
    prompt flips open and closed on repeated clicks.
    """

    def __init__(self) -> None:
        self._open_prompts: set[int] = set()

    def prompt_open(self, image_id: int) -> bool:
        return image_id in self._open_prompts

    def _flip_prompt(self, image_id: int) -> bool:
        if image_id in self._open_prompts:
            self._open_prompts.discard(image_id)
            return False
        self._open_prompts.add(image_id)
        return True

    def click(
        self, image: GuardedImage, path: str, ctx: GuardContext | None = None
    ) -> ClickOutcome:
        """
        Handle a click on the badge of ``image``.

        Args:
            image: Image whose badge was clicked
            path: Current navigation path, used as the sign-in return target
            ctx: Guard context; the ambient one is used when omitted

        Returns:
            The decision taken and the image's disposition afterwards
        """
        context = get_guard_context(ctx)
        affordance = describe_affordance(image, context)
        decision = decide_click(affordance)
        prompt: LoginPrompt | None = None

        if decision is GateDecision.PROMPT:
            prompt = LoginPrompt(
                opened=self._flip_prompt(image.id),
                message=settings.LOGIN_PROMPT_MESSAGE,
                login_url=build_login_url(path),
            )
        elif decision is GateDecision.ALLOW:
            if context.connect is not None:
                context.store.toggle_connection(context.connect)
            else:
                context.store.toggle_image(image.id)

        logger.debug(
            "badge_clicked",
            image_id=image.id,
            decision=decision.value,
            target=affordance.target,
        )

        return ClickOutcome(
            decision=decision,
            disposition=context.disposition(image),
            stop_propagation=affordance.stop_propagation,
            prompt=prompt,
        )

    def reveal_all(self, path: str, ctx: GuardContext | None = None) -> RevealOutcome:
        """Reveal every adult image of the pass, behind the same sign-in check."""
        context = get_guard_context(ctx)
        adult_ids = [image.id for image in context.images if image.nsfw]

        if not adult_ids:
            return RevealOutcome(decision=GateDecision.IGNORE)

        if not context.viewer.authenticated:
            logger.debug("reveal_all_prompted", image_count=len(adult_ids))
            return RevealOutcome(
                decision=GateDecision.PROMPT,
                prompt=LoginPrompt(
                    opened=True,
                    message=settings.LOGIN_PROMPT_MESSAGE,
                    login_url=build_login_url(path),
                ),
            )

        context.store.reveal_images(adult_ids)
        return RevealOutcome(decision=GateDecision.ALLOW, revealed_ids=adult_ids)

"""Walk the prompt steps and turn the answers into a session."""

from __future__ import annotations

import logging
from typing import Sequence

from create_cp.core.errors import PromptAborted

from .models import (
    CANCELLED_MESSAGE,
    Cancelled,
    Resolution,
    ResolutionState,
    ResolvedSession,
    ResolverContext,
)
from .prompter import Prompter
from .steps import STEPS, Step

__all__ = ["resolve_session", "resolve_locator"]

logger = logging.getLogger(__name__)


def resolve_locator(state: ResolutionState, ctx: ResolverContext) -> str | None:
    """Pick the repository to clone.

    A chosen variant wins over the chosen owner's own locator, which wins
    over a catalog lookup of the ``--template`` value.
    """
    if state.framework:
        return state.framework
    if state.owner is not None and state.owner.locator:
        return state.owner.locator
    if state.template:
        return ctx.catalog.get(state.template)
    return None


def resolve_session(
    ctx: ResolverContext,
    prompter: Prompter,
    *,
    target_dir: str | None = None,
    template: str | None = None,
    steps: Sequence[Step] = STEPS,
) -> Resolution:
    """Run every applicable step in order and build the resolved session.

    Returns :class:`Cancelled` when the user aborts a prompt, declines to
    overwrite a non-empty target, or no template could be determined.
    """
    state = ResolutionState.initial(target_dir, template)

    for step in steps:
        if step.skip(state, ctx):
            logger.debug("Skipping step %s", step.name.value)
            continue
        logger.debug("Running step %s", step.name.value)
        try:
            outcome = step.run(state, ctx, prompter)
        except PromptAborted:
            logger.debug("Prompt aborted during step %s", step.name.value)
            return Cancelled(CANCELLED_MESSAGE)
        if isinstance(outcome, Cancelled):
            return outcome

    locator = resolve_locator(state, ctx)
    target = state.target_dir or ctx.default_project_name
    package_name = state.package_name or state.project_name(ctx.cwd)
    if not locator or not package_name:
        logger.debug("No template resolved (template=%r)", template)
        return Cancelled("No template selected")

    logger.debug("Resolved %s -> %s (package %s)", locator, target, package_name)
    return ResolvedSession(
        target_dir=target,
        package_name=package_name,
        template_locator=locator,
        overwrite=bool(state.overwrite),
    )

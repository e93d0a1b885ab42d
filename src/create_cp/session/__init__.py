"""Interactive resolution of the project session."""

from .models import Cancelled, Resolution, ResolvedSession, ResolutionState, ResolverContext
from .prompter import Choice, ConsolePrompter, Prompter
from .resolver import resolve_locator, resolve_session
from .steps import STEPS, Step, StepName

__all__ = [
    "Cancelled",
    "Resolution",
    "ResolvedSession",
    "ResolutionState",
    "ResolverContext",
    "Choice",
    "ConsolePrompter",
    "Prompter",
    "resolve_locator",
    "resolve_session",
    "STEPS",
    "Step",
    "StepName",
]

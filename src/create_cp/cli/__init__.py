"""CLI helpers exposed for other modules."""

from .ui import confirm_with_keys, select_with_arrows, text_input

__all__ = ["confirm_with_keys", "select_with_arrows", "text_input"]

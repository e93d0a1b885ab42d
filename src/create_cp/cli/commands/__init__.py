"""CLI command modules for create-cp."""

from .init import register_init_command

__all__ = ["register_init_command"]

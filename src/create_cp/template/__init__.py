"""Template catalog."""

from .catalog import OWNERS, ColorTag, TemplateNode, build_catalog, find_owner

__all__ = ["OWNERS", "ColorTag", "TemplateNode", "build_catalog", "find_owner"]

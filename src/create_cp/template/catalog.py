"""Built-in template tree and its flattened name -> locator lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

__all__ = [
    "ColorTag",
    "TemplateNode",
    "OWNERS",
    "build_catalog",
    "find_owner",
]


class ColorTag(str, Enum):
    """Display colour of a node; values are rich style names."""

    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    GREEN = "green"
    CYAN = "cyan"
    RED = "red"


@dataclass(frozen=True)
class TemplateNode:
    """A catalog entry.

    Owners group variants through ``children``. Any node that carries a
    ``locator`` is a selectable template; leaves must carry one.
    """

    name: str
    color: ColorTag = ColorTag.YELLOW
    children: tuple["TemplateNode", ...] = ()
    locator: str | None = None

    def __post_init__(self) -> None:
        if not self.children and not self.locator:
            raise ValueError(f"Template '{self.name}' has neither variants nor a locator")

    @property
    def selectable(self) -> bool:
        return self.locator is not None

    @property
    def is_owner(self) -> bool:
        return bool(self.children)

    def label(self) -> str:
        """Rich markup for the node name in its colour."""
        return f"[{self.color.value}]{self.name}[/{self.color.value}]"


OWNERS: tuple[TemplateNode, ...] = (
    TemplateNode(
        name="antfu",
        color=ColorTag.YELLOW,
        children=(
            TemplateNode("vitesse", ColorTag.YELLOW, locator="git@github.com:antfu/vitesse.git"),
            TemplateNode("vitesse-lite", ColorTag.BLUE, locator="git@github.com:antfu/vitesse-lite.git"),
            TemplateNode("starter-ts", ColorTag.MAGENTA, locator="git@github.com:antfu/starter-ts.git"),
        ),
    ),
    TemplateNode(
        name="chinbor",
        color=ColorTag.YELLOW,
        children=(
            TemplateNode(
                "starter-wechat",
                ColorTag.YELLOW,
                locator="git@github.com:chinbor/starter-wechat-applet.git",
            ),
        ),
    ),
)


def _walk(nodes: Iterable[TemplateNode]) -> Iterable[TemplateNode]:
    for node in nodes:
        yield node
        yield from _walk(node.children)


def build_catalog(owners: Iterable[TemplateNode] = OWNERS) -> Mapping[str, str]:
    """Flatten ``owners`` into a read-only ``{name: locator}`` mapping.

    Names share one namespace across owners; a later duplicate overwrites an
    earlier one.
    """
    catalog: dict[str, str] = {}
    for node in _walk(owners):
        if node.locator:
            catalog[node.name] = node.locator
    return MappingProxyType(catalog)


def find_owner(owners: Iterable[TemplateNode], name: str) -> TemplateNode | None:
    """Return the top-level node called ``name``."""
    for owner in owners:
        if owner.name == name:
            return owner
    return None

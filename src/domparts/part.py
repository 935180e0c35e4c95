"""Common part contract.

A part binds ordered string metadata to a location in the tree. There are
exactly two kinds, and code that handles parts matches on them exhaustively:

    match part:
        case NodePart():
            ...
        case ChildNodePart():
            ...

``PartRoot`` is anything that holds parts: a DocumentPart or a ChildNodePart.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from domparts.child_node_part import ChildNodePart
    from domparts.node_part import NodePart

Part: TypeAlias = "NodePart | ChildNodePart"


@dataclass(frozen=True, slots=True)
class PartInit:
    """Options for constructing a part.

    Attributes:
        metadata: Metadata strings, copied into the part (None means empty)
        parts: Pre-computed nested parts for a ChildNodePart. The parser and
            the cloner already know a part's contents, so they seed its cache
            instead of walking the tree again.

    """

    metadata: list[str] | None = None
    parts: list[Part] | None = None


@runtime_checkable
class PartRoot(Protocol):
    """Anything that contains parts."""

    def get_parts(self) -> list[Part]:
        """Walk the tree and return the current, validated parts."""
        ...

    def get_cached_parts(self) -> list[Part]:
        """Return the parts from the last walk, without walking."""
        ...


__all__ = ["Part", "PartInit", "PartRoot"]

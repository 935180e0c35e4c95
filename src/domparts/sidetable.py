"""Identity-keyed side-tables linking tree nodes to parts.

The tree never stores parts. Each annotation kind has its own table mapping
a node (by identity) to the part or root that claims it:

- NODE_PARTS: node -> the NodePart wrapping it
- PREVIOUS_SIBLING_PARTS: node -> the ChildNodePart it starts
- NEXT_SIBLING_PARTS: node -> the ChildNodePart it ends
- OWNED_CHILD_PARTS: node -> the ChildNodePart that owns it after validation
- DOCUMENT_PARTS: root node -> its DocumentPart

Entries live until the owning part is disconnected.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from domparts.child_node_part import ChildNodePart
    from domparts.document_part import DocumentPart
    from domparts.dom import Node
    from domparts.node_part import NodePart

V = TypeVar("V")


class SideTable(Generic[V]):
    """Mapping from node identity to one annotation value."""

    __slots__ = ("_entries", "name")

    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: dict[Node, V] = {}

    def get(self, node: Node) -> V | None:
        return self._entries.get(node)

    def set(self, node: Node, value: V) -> None:
        self._entries[node] = value

    def delete(self, node: Node, value: V | None = None) -> None:
        """Remove the entry for ``node``.

        When ``value`` is given, the entry is removed only if it still maps to
        that value, so a part never clears an annotation another part now holds.

        """
        current = self._entries.get(node)
        if current is None:
            return
        if value is None or current is value:
            del self._entries[node]

    def __contains__(self, node: Node) -> bool:
        return node in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SideTable({self.name!r}, entries={len(self._entries)})"


NODE_PARTS: SideTable[NodePart] = SideTable("node_part")
PREVIOUS_SIBLING_PARTS: SideTable[ChildNodePart] = SideTable("previous_sibling")
NEXT_SIBLING_PARTS: SideTable[ChildNodePart] = SideTable("next_sibling")
OWNED_CHILD_PARTS: SideTable[ChildNodePart] = SideTable("owned_child")
DOCUMENT_PARTS: SideTable[DocumentPart] = SideTable("document_part")

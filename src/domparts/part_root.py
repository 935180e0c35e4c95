"""Find the PartRoot that contains a node."""

from __future__ import annotations

from domparts.dom import Node
from domparts.part import PartRoot
from domparts.sidetable import DOCUMENT_PARTS, OWNED_CHILD_PARTS
from domparts.validator import PartValidator


def get_part_root(node: Node) -> PartRoot | None:
    """Walk up from ``node`` and return the closest PartRoot.

    That is the ChildNodePart owning the node or one of its ancestors, or the
    DocumentPart attached to an ancestor (or the node itself). Ownership is
    refreshed for each parent on the way up, so the answer reflects the live
    tree. Returns None when no ancestor has a root.

    """
    validator = PartValidator()
    current: Node | None = node
    while current is not None:
        if current.parent is not None:
            validator.refresh_child_node_parts(current.parent)
        owner = OWNED_CHILD_PARTS.get(current)
        if owner is not None:
            return owner
        document_part = DOCUMENT_PARTS.get(current)
        if document_part is not None:
            return document_part
        current = current.parent
    return None


__all__ = ["get_part_root"]

"""Deep clone of a rooted tree together with its parts.

The tree is cloned, then the original and the clone are walked in lockstep.
Every NodePart and every valid ChildNodePart found on the original is
recreated on the corresponding clone nodes, nested exactly as before.
Invalid ChildNodeParts are not recreated; their boundary nodes are cloned as
plain nodes. A ChildNodePart's frame opens only once the walk has left the
subtree of its previous boundary: parts inside that boundary sit next to
the ChildNodePart, not in it, and follow it in the enclosing list.

Immediately after cloning, the new DocumentPart's cached parts are complete
and refer only to clone nodes.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import zip_longest

from domparts.child_node_part import ChildNodePart
from domparts.document_part import DocumentPart
from domparts.dom import Node
from domparts.node_part import NodePart
from domparts.part import Part, PartInit
from domparts.sidetable import NEXT_SIBLING_PARTS, NODE_PARTS, PREVIOUS_SIBLING_PARTS
from domparts.utils.logger import get_logger
from domparts.validator import PartValidator

logger = get_logger(__name__)


@dataclass(slots=True)
class _Frame:
    parent: _Frame | None = None
    previous_sibling: Node | None = None
    position: int = 0
    metadata: list[str] = field(default_factory=list)
    parts: list[Part] = field(default_factory=list)


def clone_parts(root: Node) -> DocumentPart:
    """Deep-clone ``root`` and return a DocumentPart over the clone."""
    return PartCloner(root).clone()


class PartCloner:
    """Single-use cloner for one root."""

    __slots__ = ("_frame", "_pending", "_root", "_validator")

    def __init__(self, root: Node) -> None:
        self._root = root
        self._frame = _Frame()
        self._pending: list[tuple[ChildNodePart, Node, int]] = []
        self._validator = PartValidator()

    def clone(self) -> DocumentPart:
        root_clone = self._root.clone(deep=True)
        pairs = zip_longest(self._root.iter_descendants(), root_clone.iter_descendants())
        for node, node_clone in pairs:
            if node is None or node_clone is None:
                raise RuntimeError("Cloned tree does not match the original")
            self._open_pending(node)
            self._visit(node, node_clone)
        self._open_pending(None)

        if self._frame.parent is not None:
            raise RuntimeError("Unbalanced child node parts while cloning")
        return DocumentPart(root_clone, self._frame.parts)

    def _visit(self, node: Node, node_clone: Node) -> None:
        end = NEXT_SIBLING_PARTS.get(node)
        if end is not None and self._validator.child_node_part_valid(end):
            frame = self._frame
            assert frame.parent is not None and frame.previous_sibling is not None
            part = ChildNodePart(
                frame.previous_sibling,
                node_clone,
                PartInit(metadata=frame.metadata, parts=frame.parts),
            )
            self._frame = frame.parent
            self._frame.parts.insert(frame.position, part)

        node_part = NODE_PARTS.get(node)
        if node_part is not None:
            self._frame.parts.append(NodePart(node_clone, PartInit(metadata=node_part.metadata)))

        start = PREVIOUS_SIBLING_PARTS.get(node)
        if start is not None:
            if self._validator.child_node_part_valid(start):
                self._pending.append((start, node_clone, len(self._frame.parts)))
            else:
                logger.debug("Not cloning invalid %r", start)

    def _open_pending(self, node: Node | None) -> None:
        """Open the frames of ChildNodeParts whose previous boundary ``node`` is outside.

        ``None`` flushes everything at the end of the walk.

        """
        while self._pending:
            start, previous_clone, position = self._pending[-1]
            if node is not None and start.previous_sibling.contains(node):
                return
            self._pending.pop()
            self._frame = _Frame(
                parent=self._frame,
                previous_sibling=previous_clone,
                position=position,
                metadata=list(start.metadata),
            )


__all__ = ["PartCloner", "clone_parts"]

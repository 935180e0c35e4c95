"""Live walk of a subtree producing its current parts in document order.

NodeParts are reported at their node. A valid ChildNodePart is reported at
its previous boundary, and the walk then jumps to its next boundary: the
nodes in between belong to the ChildNodePart and are reported by its own
``get_parts()``. Invalid ChildNodeParts are not reported and the nodes they
would have covered are walked like any others.

Validity is checked through one PartValidator per walk, so each parent is
scanned at most once and the walk stays linear in the size of the subtree.

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import assert_never

from domparts.child_node_part import ChildNodePart
from domparts.dom import Node
from domparts.node_part import NodePart
from domparts.part import Part
from domparts.sidetable import NODE_PARTS, PREVIOUS_SIBLING_PARTS
from domparts.validator import PartValidator


def get_parts(root: Node | Sequence[Node]) -> list[Part]:
    """Return the parts under ``root``.

    Args:
        root: A single node, whose descendants are walked (the node itself is
            the container and is not inspected), or a sequence of nodes, each
            walked together with its descendants.

    """
    return PartGetter(root).get_parts()


class PartGetter:
    """Visits all parts under one or more roots."""

    __slots__ = ("_parts", "_roots", "_single_root", "_validator")

    def __init__(self, root: Node | Sequence[Node]) -> None:
        if isinstance(root, Node):
            self._single_root: Node | None = root
            self._roots: Sequence[Node] = ()
        else:
            self._single_root = None
            self._roots = root
        self._parts: list[Part] = []
        self._validator = PartValidator()

    def get_parts(self) -> list[Part]:
        if self._single_root is not None:
            self._walk_siblings(self._single_root.first_child)
        else:
            for root in self._roots:
                self._visit(root)
                self._walk_siblings(root.first_child)
        return self._parts

    def _walk_siblings(self, node: Node | None) -> None:
        # Children before the resume point, so pop the child last pushed.
        stack = [node]
        while stack:
            current = stack.pop()
            if current is None:
                continue
            resume = self._visit(current)
            stack.append(resume if resume is not None else current.next_sibling)
            stack.append(current.first_child)

    def _visit(self, node: Node) -> Node | None:
        """Record parts anchored at ``node``.

        Returns the node the sibling walk should resume from when a valid
        ChildNodePart starts here, else None.

        """
        resume: Node | None = None
        for part in self._parts_at(node):
            match part:
                case NodePart():
                    self._parts.append(part)
                case ChildNodePart():
                    if self._validator.child_node_part_valid(part):
                        self._parts.append(part)
                        resume = part.next_sibling
                case _:
                    assert_never(part)
        return resume

    @staticmethod
    def _parts_at(node: Node) -> list[Part]:
        parts: list[Part] = []
        node_part = NODE_PARTS.get(node)
        if node_part is not None:
            parts.append(node_part)
        child_node_part = PREVIOUS_SIBLING_PARTS.get(node)
        if child_node_part is not None:
            parts.append(child_node_part)
        return parts


__all__ = ["PartGetter", "get_parts"]

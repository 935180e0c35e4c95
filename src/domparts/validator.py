"""Per-parent validity tracking for ChildNodeParts.

``refresh_child_node_parts(parent)`` recomputes validity and owned children
for every ChildNodePart whose boundaries are immediate children of
``parent``, in one left-to-right scan of those children.

Algorithm:
    A stack holds the ChildNodeParts opened so far, each with the children
    seen since it opened. For each child, in order:

    1. If the child ends a part: the part must be on the stack. If it is the
       top entry it is valid and owns its accumulated children. If other
       entries were opened after it, the ranges cross: every entry from the
       part to the top is invalid, and their children fold into the entry
       that is left on top. A part that was never opened is invalid.
    2. The child is appended to the top entry's children.
    3. If the child starts a part whose end is under the same parent, the
       part is pushed; otherwise it is invalid.

    Entries still open after the scan are invalid and own nothing.

Nesting is encoded by stack depth and overlap shows up as a part closed out
of stack order, so the cost is O(children of parent) regardless of depth.

A ``ProspectiveChildNodePart`` rides along the same scan to decide whether a
not-yet-attached range would be valid, before a ChildNodePart attaches itself.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from domparts.sidetable import NEXT_SIBLING_PARTS, PREVIOUS_SIBLING_PARTS

if TYPE_CHECKING:
    from domparts.child_node_part import ChildNodePart
    from domparts.dom import Node


@dataclass(slots=True)
class ProspectiveChildNodePart:
    """A candidate range evaluated without attaching it.

    Filled in by ``refresh_child_node_parts``:

    Attributes:
        in_order: True once the start was seen before the end, False if the
            end came first, None if neither was seen
        valid: Whether the candidate closes under the same enclosing part
            it opened in
        parent: The ChildNodePart enclosing the candidate (None at top level)

    """

    previous_sibling: Node
    next_sibling: Node
    in_order: bool | None = None
    valid: bool | None = None
    parent: ChildNodePart | None = None


@dataclass(slots=True)
class _StackEntry:
    child_node_part: ChildNodePart
    children: list[Node] = field(default_factory=list)


def refresh_child_node_parts(
    parent: Node,
    *,
    prospective: ProspectiveChildNodePart | None = None,
) -> None:
    """Recompute validity and owned children of the ChildNodeParts under ``parent``.

    Args:
        parent: Node whose immediate children are scanned
        prospective: Optional candidate range to evaluate in the same pass

    """
    settled: set[ChildNodePart] = set()
    stack: list[_StackEntry] = []

    def settle(part: ChildNodePart, valid: bool, children: list[Node] | None = None) -> None:
        part.set_cached_valid(valid)
        part.set_cached_owned_children(children or [])
        settled.add(part)

    def top_part() -> ChildNodePart | None:
        return stack[-1].child_node_part if stack else None

    def validate_end(node: Node) -> None:
        if prospective is not None and prospective.next_sibling is node:
            if prospective.in_order is None:
                prospective.in_order = False
                prospective.valid = False
            elif prospective.valid is None:
                prospective.valid = prospective.parent is top_part()

        part = NEXT_SIBLING_PARTS.get(node)
        if part is None or part in settled:
            return
        index = next(
            (i for i, entry in enumerate(stack) if entry.child_node_part is part),
            -1,
        )
        if index == -1:
            # Closed without being opened under this parent
            settle(part, False)
            return
        removed = stack[index:]
        del stack[index:]
        if len(removed) == 1:
            settle(part, True, removed[0].children)
            return
        for entry in removed:
            # Crossing ranges: children go back to whatever encloses them
            if stack:
                stack[-1].children.extend(entry.children)
            settle(entry.child_node_part, False)

    def validate_start(node: Node) -> None:
        if (
            prospective is not None
            and prospective.previous_sibling is node
            and prospective.in_order is None
        ):
            prospective.in_order = True
            prospective.parent = top_part()

        part = PREVIOUS_SIBLING_PARTS.get(node)
        if part is None or part in settled:
            return
        if part.next_sibling.parent is not parent:
            # Parents mismatch
            settle(part, False)
            return
        stack.append(_StackEntry(part))

    for node in parent.iter_children():
        validate_end(node)
        if stack:
            stack[-1].children.append(node)
        validate_start(node)

    for entry in stack:
        # Never closed
        settle(entry.child_node_part, False)

    if prospective is not None and prospective.valid is None:
        prospective.valid = False


class PartValidator:
    """Validation cache for one query over a tree that is not changing.

    Remembers which parents were already refreshed, so a walk that meets many
    ChildNodeParts under the same parent scans that parent once. Create one
    per query; reusing it across tree mutations returns stale answers.

    """

    __slots__ = ("_refreshed_parents",)

    def __init__(self) -> None:
        self._refreshed_parents: set[Node] = set()

    def child_node_part_valid(self, child_node_part: ChildNodePart) -> bool:
        if not child_node_part.get_parents_valid():
            child_node_part.set_cached_valid(False)
            return False
        parent = child_node_part.previous_sibling.parent
        assert parent is not None
        self.refresh_child_node_parts(parent)
        return child_node_part.get_cached_valid()

    def refresh_child_node_parts(self, parent: Node) -> None:
        if parent not in self._refreshed_parents:
            refresh_child_node_parts(parent)
            self._refreshed_parents.add(parent)


__all__ = ["PartValidator", "ProspectiveChildNodePart", "refresh_child_node_parts"]

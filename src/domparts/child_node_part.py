"""ChildNodePart: a part wrapping the siblings between two boundary nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domparts.dom import Node, Text
from domparts.errors import (
    ExistingPartError,
    InvalidPartError,
    OverlappingPartError,
    PartConstructionError,
)
from domparts.part import Part, PartInit
from domparts.sidetable import NEXT_SIBLING_PARTS, OWNED_CHILD_PARTS, PREVIOUS_SIBLING_PARTS
from domparts.validator import ProspectiveChildNodePart, refresh_child_node_parts

if TYPE_CHECKING:
    from domparts.part import PartRoot


class ChildNodePart:
    """A part wrapping all nodes strictly between two sibling boundaries.

    ``previous_sibling`` and ``next_sibling`` must share a parent, be in that
    order, and not be used as the same kind of boundary by another part. Parts
    under one parent must be disjoint or properly nested; two parts may touch
    (one's next boundary is the other's previous boundary).

    Validity, owned children and nested parts are cached side-table state.
    ``valid`` re-scans the parent on every read; the ``get_cached_*`` accessors
    return whatever the last scan or walk produced.

    Example:
        >>> part = ChildNodePart(start_comment, end_comment, PartInit(metadata=["list"]))
        >>> part.replace_children("first", Element("hr"), "second")
        >>> [type(n).__name__ for n in part.get_children()]
        ['Text', 'Element', 'Text']

    """

    __match_args__ = ("previous_sibling", "next_sibling")
    __slots__ = (
        "_cached_owned_children",
        "_cached_part_root",
        "_cached_parts",
        "_cached_valid",
        "_connected",
        "metadata",
        "next_sibling",
        "previous_sibling",
    )

    def __init__(
        self,
        previous_sibling: Node,
        next_sibling: Node,
        init: PartInit | None = None,
    ) -> None:
        parent = previous_sibling.parent
        if parent is None or next_sibling.parent is None:
            raise PartConstructionError("Siblings must be in the tree")
        if PREVIOUS_SIBLING_PARTS.get(previous_sibling) is not None:
            raise ExistingPartError("Existing ChildNodePart for previous_sibling")
        if NEXT_SIBLING_PARTS.get(next_sibling) is not None:
            raise ExistingPartError("Existing ChildNodePart for next_sibling")
        if parent is not next_sibling.parent:
            raise PartConstructionError("Previous and next sibling do not share a parent")

        prospective = ProspectiveChildNodePart(previous_sibling, next_sibling)
        refresh_child_node_parts(parent, prospective=prospective)
        if not prospective.in_order:
            raise PartConstructionError("previous_sibling must precede next_sibling")
        if not prospective.valid:
            raise OverlappingPartError("Overlapping ChildNodePart")

        init = init or PartInit()
        self.previous_sibling = previous_sibling
        self.next_sibling = next_sibling
        self.metadata: list[str] = list(init.metadata or ())
        self._cached_parts: list[Part] = list(init.parts) if init.parts is not None else []
        self._cached_part_root: PartRoot | None = None
        self._cached_valid = True
        self._cached_owned_children: list[Node] = []
        self._connected = True

        PREVIOUS_SIBLING_PARTS.set(previous_sibling, self)
        NEXT_SIBLING_PARTS.set(next_sibling, self)
        # Attaching changes ownership of the enclosing part's children too
        refresh_child_node_parts(parent)

    # -- Part contract ---------------------------------------------------------

    @property
    def valid(self) -> bool:
        """Whether the boundaries currently form a valid range.

        Re-scans the boundaries' parent, so the answer reflects the live tree.

        """
        if not self._connected or not self.get_parents_valid():
            self._cached_valid = False
        else:
            assert self.previous_sibling.parent is not None
            refresh_child_node_parts(self.previous_sibling.parent)
        return self._cached_valid

    def disconnect(self) -> None:
        if not self._connected:
            return
        self._connected = False
        self._cached_valid = False
        PREVIOUS_SIBLING_PARTS.delete(self.previous_sibling, self)
        NEXT_SIBLING_PARTS.delete(self.next_sibling, self)
        self.set_cached_owned_children([])

    # -- PartRoot contract -----------------------------------------------------

    def get_parts(self) -> list[Part]:
        """Walk the owned children and return the current nested parts.

        Returns an empty list when the part is invalid. The walk visits every
        node under the owned children; prefer ``get_cached_parts()`` when the
        tree is known not to have changed.

        """
        from domparts.getter import get_parts

        if not self.valid:
            return []
        self._cached_parts = get_parts(self._cached_owned_children)
        return self._cached_parts

    def get_cached_parts(self) -> list[Part]:
        return self._cached_parts

    @property
    def part_root(self) -> PartRoot | None:
        """The PartRoot enclosing this part, or None once disconnected."""
        from domparts.part_root import get_part_root

        if not self._connected:
            return None
        self._cached_part_root = get_part_root(self.previous_sibling)
        return self._cached_part_root

    def get_cached_part_root(self) -> PartRoot | None:
        return self._cached_part_root

    # -- Children --------------------------------------------------------------

    def get_children(self) -> list[Node]:
        """Tree children strictly between the boundaries ([] when invalid)."""
        if not self.valid:
            return []
        return self._dom_children()

    def get_owned_children(self) -> list[Node]:
        """Children between the boundaries that are not inside a nested part."""
        if not self.valid:
            return []
        return self._cached_owned_children

    def replace_children(self, *children: Node | str) -> None:
        """Replace everything between the boundaries.

        Strings are inserted as Text nodes.

        Raises:
            InvalidPartError: if the part is not currently valid.

        """
        if not self.valid:
            raise InvalidPartError("ChildNodePart is invalid")
        parent = self.previous_sibling.parent
        assert parent is not None
        for child in self._dom_children():
            parent.remove_child(child)
        for child in children:
            node = Text(child) if isinstance(child, str) else child
            parent.insert_before(node, self.next_sibling)

    # -- Cache access (validator) ----------------------------------------------

    def get_parents_valid(self) -> bool:
        return (
            self.previous_sibling.parent is not None
            and self.previous_sibling.parent is self.next_sibling.parent
        )

    def get_cached_valid(self) -> bool:
        return self._cached_valid

    def set_cached_valid(self, valid: bool) -> None:
        self._cached_valid = valid

    def get_cached_owned_children(self) -> list[Node]:
        return self._cached_owned_children

    def set_cached_owned_children(self, children: list[Node]) -> None:
        for child in self._cached_owned_children:
            OWNED_CHILD_PARTS.delete(child, self)
        self._cached_owned_children = children
        for child in children:
            OWNED_CHILD_PARTS.set(child, self)

    def _dom_children(self) -> list[Node]:
        children: list[Node] = []
        child = self.previous_sibling.next_sibling
        while child is not None and child is not self.next_sibling:
            children.append(child)
            child = child.next_sibling
        return children

    def __repr__(self) -> str:
        return (
            f"ChildNodePart({self.previous_sibling!r}, {self.next_sibling!r}, "
            f"metadata={self.metadata!r})"
        )

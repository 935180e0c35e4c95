"""Minimal mutable DOM-like tree for domparts.

Parts annotate nodes of an externally-owned tree. This module provides that
tree: node identity, parent and sibling links, node kinds, insertion and
removal, deep cloning and document-order traversal. It knows nothing about
parts; all annotations live in side-tables keyed by node identity
(see ``domparts.sidetable``).

Node Hierarchy:
Node (base)
├── Element
├── Text
├── Comment
├── DocumentFragment
└── Document

Example:
    >>> frag = DocumentFragment()
    >>> div = frag.append_child(Element("div", {"id": "a"}))
    >>> div.append_child(Text("hello"))
    Text('hello')
    >>> [n.kind for n in frag.iter_descendants()]
    [<NodeKind.ELEMENT: 1>, <NodeKind.TEXT: 3>]

Thread Safety:
Nodes are mutable and not synchronized. Confine a tree to one thread.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import IntEnum


class NodeKind(IntEnum):
    """Node kinds, numbered like the DOM ``nodeType`` constants."""

    ELEMENT = 1
    TEXT = 3
    COMMENT = 8
    DOCUMENT = 9
    DOCUMENT_FRAGMENT = 11


class Node:
    """Base class for all tree nodes.

    Children are kept as a doubly linked list so sibling navigation and
    insertion are O(1). Equality and hashing are by identity.

    """

    __slots__ = (
        "first_child",
        "last_child",
        "next_sibling",
        "parent",
        "previous_sibling",
    )

    kind: NodeKind

    def __init__(self) -> None:
        self.parent: Node | None = None
        self.first_child: Node | None = None
        self.last_child: Node | None = None
        self.previous_sibling: Node | None = None
        self.next_sibling: Node | None = None

    # -- Navigation ------------------------------------------------------------

    @property
    def child_nodes(self) -> list[Node]:
        """Snapshot of the immediate children, in order."""
        return list(self.iter_children())

    def iter_children(self) -> Iterator[Node]:
        """Yield immediate children in order.

        The next sibling is read before yielding, so the current child may be
        removed by the caller without ending the iteration early.

        """
        child = self.first_child
        while child is not None:
            following = child.next_sibling
            yield child
            child = following

    def iter_descendants(self) -> Iterator[Node]:
        """Yield all descendants in document order (pre-order), excluding self."""
        node = self.first_child
        while node is not None:
            yield node
            node = _following(node, self)

    def contains(self, other: Node | None) -> bool:
        """Return True if ``other`` is this node or one of its descendants."""
        while other is not None:
            if other is self:
                return True
            other = other.parent
        return False

    # -- Mutation --------------------------------------------------------------

    def append_child(self, child: Node) -> Node:
        return self.insert_before(child, None)

    def insert_before(self, child: Node, reference: Node | None) -> Node:
        """Insert ``child`` before ``reference`` (or at the end when None).

        A child that already has a parent is moved.

        Raises:
            ValueError: if ``reference`` is not a child of this node, or the
                insertion would make a node its own ancestor.

        """
        if reference is not None and reference.parent is not self:
            raise ValueError("Reference node is not a child of this node")
        if child.contains(self):
            raise ValueError("Cannot insert a node into itself or its descendants")
        if child is reference:
            return child
        if child.parent is not None:
            child.parent.remove_child(child)

        child.parent = self
        child.next_sibling = reference
        if reference is None:
            child.previous_sibling = self.last_child
            if self.last_child is not None:
                self.last_child.next_sibling = child
            else:
                self.first_child = child
            self.last_child = child
        else:
            child.previous_sibling = reference.previous_sibling
            if reference.previous_sibling is not None:
                reference.previous_sibling.next_sibling = child
            else:
                self.first_child = child
            reference.previous_sibling = child
        return child

    def remove_child(self, child: Node) -> Node:
        """Detach ``child`` from this node.

        Raises:
            ValueError: if ``child`` is not a child of this node.

        """
        if child.parent is not self:
            raise ValueError("Node is not a child of this node")
        if child.previous_sibling is not None:
            child.previous_sibling.next_sibling = child.next_sibling
        else:
            self.first_child = child.next_sibling
        if child.next_sibling is not None:
            child.next_sibling.previous_sibling = child.previous_sibling
        else:
            self.last_child = child.previous_sibling
        child.parent = None
        child.previous_sibling = None
        child.next_sibling = None
        return child

    def remove(self) -> None:
        """Detach this node from its parent, if any."""
        if self.parent is not None:
            self.parent.remove_child(self)

    # -- Cloning ---------------------------------------------------------------

    def clone(self, deep: bool = False) -> Node:
        """Return a copy of this node, detached from any parent.

        With ``deep=True`` the whole subtree is copied, preserving child order,
        so a pre-order walk of the copy lines up node-for-node with the original.

        """
        copy = self._shallow_copy()
        if deep:
            pending = [(self, copy)]
            while pending:
                original, target = pending.pop()
                for child in original.iter_children():
                    child_copy = target.append_child(child._shallow_copy())
                    pending.append((child, child_copy))
        return copy

    def _shallow_copy(self) -> Node:
        raise NotImplementedError


def _following(node: Node, root: Node) -> Node | None:
    """Next node after ``node`` in pre-order, staying inside ``root``."""
    if node.first_child is not None:
        return node.first_child
    while node is not root:
        if node.next_sibling is not None:
            return node.next_sibling
        if node.parent is None:
            break
        node = node.parent
    return None


class Element(Node):
    """An element node with a tag name and string attributes."""

    __slots__ = ("attributes", "tag")

    kind = NodeKind.ELEMENT

    def __init__(self, tag: str, attributes: Mapping[str, str] | None = None) -> None:
        if not tag:
            raise ValueError("Element tag cannot be empty")
        super().__init__()
        self.tag = tag.lower()
        self.attributes: dict[str, str] = dict(attributes or {})

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")

    def _shallow_copy(self) -> Element:
        return Element(self.tag, self.attributes)

    def __repr__(self) -> str:
        if self.id:
            return f"Element({self.tag!r}, id={self.id!r})"
        return f"Element({self.tag!r})"


class CharacterData(Node):
    """Shared base of Text and Comment: a leaf node holding a string."""

    __slots__ = ("data",)

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def _shallow_copy(self) -> CharacterData:
        return type(self)(self.data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"


class Text(CharacterData):
    __slots__ = ()

    kind = NodeKind.TEXT


class Comment(CharacterData):
    """Comment node. Part markers are comments whose data matches the marker grammar."""

    __slots__ = ()

    kind = NodeKind.COMMENT


class DocumentFragment(Node):
    """Parentless container for a forest of nodes."""

    __slots__ = ()

    kind = NodeKind.DOCUMENT_FRAGMENT

    def get_element_by_id(self, element_id: str) -> Element | None:
        """Return the first descendant element with the given ``id`` attribute."""
        for node in self.iter_descendants():
            if isinstance(node, Element) and node.id == element_id:
                return node
        return None

    def _shallow_copy(self) -> DocumentFragment:
        return type(self)()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Document(DocumentFragment):
    """Top-level tree node."""

    __slots__ = ()

    kind = NodeKind.DOCUMENT


__all__ = [
    "CharacterData",
    "Comment",
    "Document",
    "DocumentFragment",
    "Element",
    "Node",
    "NodeKind",
    "Text",
]

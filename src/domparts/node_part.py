"""NodePart: a part that marks a single node."""

from __future__ import annotations

from domparts.dom import Node
from domparts.errors import ExistingPartError, PartConstructionError
from domparts.part import PartInit
from domparts.sidetable import NODE_PARTS


class NodePart:
    """A part wrapping exactly one node.

    At most one NodePart may wrap a node, and the node must be attached to a
    parent when the part is created. A NodePart has no structural ambiguity:
    it stays valid until it is disconnected.

    Example:
        >>> part = NodePart(element, PartInit(metadata=["title"]))
        >>> part.valid
        True
        >>> part.disconnect()
        >>> part.valid
        False

    """

    __match_args__ = ("node",)
    __slots__ = ("_connected", "metadata", "node")

    def __init__(self, node: Node, init: PartInit | None = None) -> None:
        if NODE_PARTS.get(node) is not None:
            raise ExistingPartError("Existing NodePart for node")
        if node.parent is None:
            raise PartConstructionError("Node must be in the tree")

        init = init or PartInit()
        self.node = node
        self.metadata: list[str] = list(init.metadata or ())
        self._connected = True
        NODE_PARTS.set(node, self)

    @property
    def valid(self) -> bool:
        return self._connected

    def disconnect(self) -> None:
        self._connected = False
        NODE_PARTS.delete(self.node, self)

    def __repr__(self) -> str:
        return f"NodePart({self.node!r}, metadata={self.metadata!r})"

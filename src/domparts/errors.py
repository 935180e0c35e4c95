"""Exception classes for domparts.

Provides standardized exceptions for error handling throughout domparts.
"""

from __future__ import annotations


class DomPartsError(Exception):
    """Base exception for all domparts errors.

    Subclass this for specific error categories.
    """

    pass


class PartConstructionError(DomPartsError):
    """A part could not be attached to the tree.

    Raised for boundaries that are detached, under different parents,
    or out of order.
    """

    pass


class ExistingPartError(PartConstructionError):
    """The node is already annotated by another part or root.

    Raised for a second NodePart on a node, a boundary node reused by
    another ChildNodePart, or a second DocumentPart over the same root.
    """

    pass


class OverlappingPartError(PartConstructionError):
    """A ChildNodePart would partially overlap an existing one."""

    pass


class InvalidPartError(DomPartsError):
    """Operation requires a currently valid part."""

    pass


class MarkerParseError(DomPartsError):
    """Malformed part marker, raised only in strict marker mode.

    Lenient parsing (the default) logs and skips these instead.
    """

    def __init__(self, message: str, marker: str | None = None) -> None:
        """Initialize marker error.

        Args:
            message: Description of the problem
            marker: Raw comment data of the offending marker (optional)
        """
        self.message = message
        self.marker = marker

        location = f" at marker {marker!r}" if marker is not None else ""
        super().__init__(f"{message}{location}")

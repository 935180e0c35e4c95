"""DocumentPart: the root container of a tree's parts."""

from __future__ import annotations

from domparts.dom import Node
from domparts.errors import ExistingPartError
from domparts.getter import get_parts
from domparts.parser import parse_parts
from domparts.part import Part
from domparts.sidetable import DOCUMENT_PARTS


def get_document_part(root: Node) -> DocumentPart:
    """Return the DocumentPart for ``root``, creating it on first use.

    On creation the markers under ``root`` are parsed into parts, which is
    what a browser would do while parsing the document.

    The side-tables hold strong references to ``root`` and to every annotated
    node, so call ``disconnect()`` on the DocumentPart and its parts when the
    tree is discarded.

    """
    existing = DOCUMENT_PARTS.get(root)
    if existing is not None:
        return existing
    return DocumentPart(root, parse_parts(root))


class DocumentPart:
    """Owns the cached top-level parts of a document, fragment or subtree.

    Only one DocumentPart may exist per root node at a time. The registration
    keeps the root alive until ``disconnect()`` is called, so disconnect it
    (and the parts it reports) before discarding the tree.

    """

    __slots__ = ("_cached_parts", "document")

    def __init__(self, document: Node, parts: list[Part]) -> None:
        if DOCUMENT_PARTS.get(document) is not None:
            raise ExistingPartError("Existing DocumentPart for document")
        self.document = document
        self._cached_parts = parts
        DOCUMENT_PARTS.set(document, self)

    def get_parts(self) -> list[Part]:
        """Walk the whole tree and return the current top-level parts.

        Every node is visited. When the tree is known not to have changed
        since the last walk, ``get_cached_parts()`` returns the same list
        without walking.

        """
        self._cached_parts = get_parts(self.document)
        return self._cached_parts

    def get_cached_parts(self) -> list[Part]:
        return self._cached_parts

    def clone(self) -> DocumentPart:
        """Deep-clone the tree and its parts into a new DocumentPart."""
        from domparts.cloner import clone_parts

        return clone_parts(self.document)

    def disconnect(self) -> None:
        DOCUMENT_PARTS.delete(self.document, self)

    def __repr__(self) -> str:
        return f"DocumentPart({self.document!r}, parts={len(self._cached_parts)})"


__all__ = ["DocumentPart", "get_document_part"]

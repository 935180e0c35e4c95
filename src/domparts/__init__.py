"""
domparts — Stable parts anchored in a mutable DOM-like tree.

A part binds metadata to a location in a tree: a NodePart marks one node, a
ChildNodePart marks the run of siblings between two boundary nodes. Parts
stay attached while the tree is edited; structural damage shows up as
``part.valid`` turning False, never as an exception at mutation time.

Quick Start:
    >>> from domparts import get_document_part, parse_fragment
    >>> frag = parse_fragment(
    ...     "<?node-part title?><h1></h1>"
    ...     "<?child-node-part items?><li></li><li></li><?/child-node-part?>"
    ... )
    >>> document_part = get_document_part(frag)
    >>> [p.metadata for p in document_part.get_cached_parts()]
    [['title'], ['items']]

    >>> items = document_part.get_cached_parts()[1]
    >>> items.replace_children("empty")
    >>> items.get_children()
    [Text('empty')]

    >>> # Parts built by hand
    >>> from domparts import NodePart
    >>> heading = frag.first_child.next_sibling
    >>> NodePart(heading)
    Traceback (most recent call last):
    ...
    domparts.errors.ExistingPartError: Existing NodePart for node

Cloning:
    >>> copy = document_part.clone()
    >>> copy.document is frag
    False

"""

from domparts.child_node_part import ChildNodePart
from domparts.cloner import PartCloner, clone_parts
from domparts.config import (
    PartsConfig,
    get_parts_config,
    parts_config_context,
    reset_parts_config,
    set_parts_config,
)
from domparts.document_part import DocumentPart, get_document_part
from domparts.dom import (
    Comment,
    Document,
    DocumentFragment,
    Element,
    Node,
    NodeKind,
    Text,
)
from domparts.errors import (
    DomPartsError,
    ExistingPartError,
    InvalidPartError,
    MarkerParseError,
    OverlappingPartError,
    PartConstructionError,
)
from domparts.getter import PartGetter, get_parts
from domparts.markup import parse_document, parse_fragment, to_html
from domparts.node_part import NodePart
from domparts.parser import PartParser, parse_parts
from domparts.part import Part, PartInit, PartRoot
from domparts.part_root import get_part_root
from domparts.serialization import shape, to_dict, to_json
from domparts.validator import PartValidator, ProspectiveChildNodePart, refresh_child_node_parts

__version__ = "0.1.0"


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Parts
    "Part",
    "PartInit",
    "PartRoot",
    "NodePart",
    "ChildNodePart",
    "DocumentPart",
    "get_document_part",
    "get_part_root",
    # Algorithms
    "PartCloner",
    "PartGetter",
    "PartParser",
    "PartValidator",
    "ProspectiveChildNodePart",
    "clone_parts",
    "get_parts",
    "parse_parts",
    "refresh_child_node_parts",
    # Tree
    "Comment",
    "Document",
    "DocumentFragment",
    "Element",
    "Node",
    "NodeKind",
    "Text",
    "parse_document",
    "parse_fragment",
    "to_html",
    # Serialization
    "shape",
    "to_dict",
    "to_json",
    # Configuration (ContextVar-based)
    "PartsConfig",
    "get_parts_config",
    "set_parts_config",
    "reset_parts_config",
    "parts_config_context",
    # Errors
    "DomPartsError",
    "ExistingPartError",
    "InvalidPartError",
    "MarkerParseError",
    "OverlappingPartError",
    "PartConstructionError",
]

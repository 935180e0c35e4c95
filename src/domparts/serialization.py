"""Part tree serialization: JSON-compatible views of parts.

Renders a part (and, for ChildNodeParts, its cached nested parts) as plain
dicts. Useful for:
- Debugging and inspection
- Comparing the shape of two part trees (a re-parse, a clone)

Output is deterministic (sorted keys). Validity is read from the cache, so
serializing never triggers a rescan.

Example:
    from domparts import get_document_part, parse_fragment
    from domparts.serialization import to_json

    document_part = get_document_part(parse_fragment(markup))
    print(to_json(document_part.get_cached_parts(), indent=2))

"""

import json
from typing import Any, assert_never

from domparts.child_node_part import ChildNodePart
from domparts.node_part import NodePart
from domparts.part import Part


def to_dict(part: Part) -> dict[str, Any]:
    """Convert a part to a JSON-compatible dict.

    Includes a ``_type`` discriminator. ChildNodeParts carry their cached
    nested parts under ``parts``.

    """
    match part:
        case NodePart():
            return {
                "_type": "NodePart",
                "metadata": list(part.metadata),
                "valid": part.valid,
            }
        case ChildNodePart():
            return {
                "_type": "ChildNodePart",
                "metadata": list(part.metadata),
                "valid": part.get_cached_valid(),
                "parts": [to_dict(child) for child in part.get_cached_parts()],
            }
        case _:
            assert_never(part)


def to_json(parts: list[Part], *, indent: int | None = None) -> str:
    """Serialize a list of parts to a JSON string."""
    return json.dumps([to_dict(part) for part in parts], indent=indent, sort_keys=True)


def shape(parts: list[Part]) -> list[Any]:
    """Reduce parts to their nesting and metadata only.

    NodeParts become ``("node", metadata)``; ChildNodeParts become
    ``("child", metadata, nested shape)``. Two part trees with equal shapes have the
    same kinds, order, nesting and metadata.

    """
    result: list[Any] = []
    for part in parts:
        match part:
            case NodePart():
                result.append(("node", tuple(part.metadata)))
            case ChildNodePart():
                result.append(("child", tuple(part.metadata), shape(part.get_cached_parts())))
            case _:
                assert_never(part)
    return result


__all__ = ["shape", "to_dict", "to_json"]

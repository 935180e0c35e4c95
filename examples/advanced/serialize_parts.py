"""Inspect a part tree as JSON."""

from domparts import get_document_part, parse_fragment
from domparts.serialization import to_json

frag = parse_fragment(
    "<?child-node-part list?>"
    "<?node-part item?><li></li>"
    "<?child-node-part nested?><li></li><?/child-node-part?>"
    "<?/child-node-part end?>"
)
document_part = get_document_part(frag)

print(to_json(document_part.get_cached_parts(), indent=2))

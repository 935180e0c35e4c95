"""Mark up a template with parts and read them back, zero deps."""

from domparts import get_document_part, parse_fragment

frag = parse_fragment(
    "<?node-part title?><h1></h1>"
    "<?child-node-part items?><li>one</li><li>two</li><?/child-node-part?>"
)
document_part = get_document_part(frag)

for part in document_part.get_cached_parts():
    print(type(part).__name__, part.metadata)

"""Stamp out copies of a template; parts come along with the nodes."""

from domparts import ChildNodePart, get_document_part, parse_fragment, to_html

template = get_document_part(
    parse_fragment("<ul><?child-node-part rows?><?/child-node-part?></ul>")
)

for label in ("first", "second"):
    instance = template.clone()
    (rows,) = instance.get_cached_parts()
    assert isinstance(rows, ChildNodePart)
    rows.replace_children(label)
    print(to_html(instance.document))

print("Template untouched:", to_html(template.document))

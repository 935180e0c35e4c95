"""HTML-ish markup bridge for the domparts tree.

Builds ``domparts.dom`` trees from markup text and serializes them back.
Parsing is forgiving in the same spirit as browser fragment parsing:
stray end tags are ignored, unclosed elements are closed at the end of
input, void elements never take children.

Processing-instruction syntax is read the way HTML parsers read it, as a
bogus comment: ``<?node-part x?>`` becomes a Comment with data
``?node-part x?``, the same data as ``<!--?node-part x?-->``.

Example:
    >>> frag = parse_fragment("<?node-part meta?><div id='a'></div>")
    >>> frag.child_nodes
    [Comment('?node-part meta?'), Element('div', id='a')]
    >>> to_html(frag)
    '<!--?node-part meta?--><div id="a"></div>'

"""

from __future__ import annotations

import html
from html.parser import HTMLParser
from typing import TypeVar

from domparts.dom import (
    Comment,
    Document,
    DocumentFragment,
    Element,
    Node,
    Text,
)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


class _TreeBuilder(HTMLParser):
    """Feeds html.parser events into a domparts tree."""

    def __init__(self, root: DocumentFragment) -> None:
        super().__init__(convert_charrefs=True)
        self._open: list[Node] = [root]

    @property
    def _current(self) -> Node:
        return self._open[-1]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = Element(tag, {name: value or "" for name, value in attrs})
        self._current.append_child(element)
        if element.tag not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._current.append_child(Element(tag, {name: value or "" for name, value in attrs}))

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        for index in range(len(self._open) - 1, 0, -1):
            node = self._open[index]
            if isinstance(node, Element) and node.tag == tag:
                del self._open[index:]
                return
        # Stray end tag: ignored

    def handle_data(self, data: str) -> None:
        last = self._current.last_child
        if isinstance(last, Text):
            last.data += data
        else:
            self._current.append_child(Text(data))

    def handle_comment(self, data: str) -> None:
        self._current.append_child(Comment(data))

    def handle_pi(self, data: str) -> None:
        # "<?x?>" arrives as "x?"; browsers keep the leading "?" in the comment
        self._current.append_child(Comment(f"?{data}"))

    def handle_decl(self, decl: str) -> None:
        # Doctype and other declarations carry no structure
        pass


def parse_fragment(markup: str) -> DocumentFragment:
    """Parse markup into a new DocumentFragment."""
    return _build(markup, DocumentFragment())


def parse_document(markup: str) -> Document:
    """Parse markup into a new Document whose children are the top-level nodes."""
    document = Document()
    _build(markup, document)
    return document


R = TypeVar("R", bound=DocumentFragment)


def _build(markup: str, root: R) -> R:
    builder = _TreeBuilder(root)
    builder.feed(markup)
    builder.close()
    return root


def to_html(node: Node) -> str:
    """Serialize a node (and its subtree) back to markup.

    Documents and fragments serialize as the concatenation of their children.
    Comments are always written in ``<!--...-->`` form.

    """
    parts: list[str] = []
    _serialize(node, parts)
    return "".join(parts)


def _serialize(node: Node, out: list[str]) -> None:
    match node:
        case Element():
            out.append(f"<{node.tag}")
            for name, value in node.attributes.items():
                out.append(f' {name}="{html.escape(value, quote=True)}"')
            out.append(">")
            if node.tag in VOID_ELEMENTS:
                return
            for child in node.iter_children():
                _serialize(child, out)
            out.append(f"</{node.tag}>")
        case Text():
            out.append(html.escape(node.data, quote=False))
        case Comment():
            out.append(f"<!--{node.data}-->")
        case DocumentFragment():
            for child in node.iter_children():
                _serialize(child, out)
        case _:
            raise TypeError(f"Cannot serialize {type(node).__name__}")


__all__ = ["VOID_ELEMENTS", "parse_document", "parse_fragment", "to_html"]

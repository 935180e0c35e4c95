"""Tests for cloning a tree with its parts."""

import pytest

from domparts import (
    ChildNodePart,
    NodePart,
    clone_parts,
    get_document_part,
    parse_document,
    parse_fragment,
)
from domparts.serialization import shape

_NESTED_MARKUP = (
    "<?node-part parent-node-metadata?><div id='parent'>"
    "<?child-node-part child-node-previous1-metadata?>"
    "<div id='child1'></div>"
    "<?node-part child2-node-metadata?><div id='child2'></div>"
    "<?/child-node-part child-node-next1-metadata?>"
    "<?child-node-part child-node-previous2-metadata?>"
    "<div id='child3'></div>"
    "<?/child-node-part child-node-next2-metadata?>"
    "</div>"
)


class TestClone:
    """Clone fidelity."""

    def test_node_child_node_and_nested_parts(self) -> None:
        document = parse_document(_NESTED_MARKUP)
        document_part = get_document_part(document)
        clone = document_part.clone()
        document_clone = clone.document
        assert document_clone is not document

        parent = document_clone.get_element_by_id("parent")  # type: ignore[attr-defined]
        child1 = document_clone.get_element_by_id("child1")  # type: ignore[attr-defined]
        child2 = document_clone.get_element_by_id("child2")  # type: ignore[attr-defined]
        child3 = document_clone.get_element_by_id("child3")  # type: ignore[attr-defined]

        parts = clone.get_cached_parts()
        assert len(parts) == 3
        part1, part2, part3 = parts

        assert isinstance(part1, NodePart)
        assert part1.node is parent
        assert part1.valid is True
        assert part1.metadata == ["parent-node-metadata"]

        assert isinstance(part2, ChildNodePart)
        assert part2.previous_sibling is child1.previous_sibling
        assert part2.next_sibling is child2.next_sibling
        assert part2.get_cached_valid() is True
        assert part2.metadata == [
            "child-node-previous1-metadata",
            "child-node-next1-metadata",
        ]
        nested = part2.get_cached_parts()
        assert len(nested) == 1
        assert isinstance(nested[0], NodePart)
        assert nested[0].node is child2
        assert nested[0].metadata == ["child2-node-metadata"]

        assert isinstance(part3, ChildNodePart)
        assert part3.previous_sibling is child3.previous_sibling
        assert part3.next_sibling is child3.next_sibling
        assert part3.get_cached_parts() == []

    def test_same_shape_as_original(self) -> None:
        document_part = get_document_part(parse_document(_NESTED_MARKUP))
        clone = document_part.clone()
        assert shape(clone.get_cached_parts()) == shape(document_part.get_cached_parts())

    def test_clone_parts_reference_only_clone_nodes(self) -> None:
        document = parse_document(_NESTED_MARKUP)
        clone = get_document_part(document).clone()
        original_nodes = set(document.iter_descendants())
        for part in clone.get_parts():
            match part:
                case NodePart():
                    assert part.node not in original_nodes
                case ChildNodePart():
                    assert part.previous_sibling not in original_nodes
                    assert part.next_sibling not in original_nodes

    def test_invalid_child_node_part_not_cloned(self) -> None:
        frag = parse_fragment("<?child-node-part a?><p id='inside'></p><?/child-node-part?>")
        document_part = get_document_part(frag)
        part = document_part.get_cached_parts()[0]
        assert isinstance(part, ChildNodePart)
        NodePart(frag.get_element_by_id("inside"))  # type: ignore[arg-type]
        part.next_sibling.remove()

        clone = clone_parts(frag)
        assert shape(clone.get_cached_parts()) == [("node", ())]

    def test_boundary_shared_by_touching_parts(self) -> None:
        frag = parse_fragment("<hr><p></p><hr><p></p><hr>")
        first_hr, _, middle_hr, _, last_hr = frag.child_nodes
        ChildNodePart(first_hr, middle_hr)
        ChildNodePart(middle_hr, last_hr)
        NodePart(middle_hr)

        clone = clone_parts(frag)
        assert shape(clone.get_cached_parts()) == [
            ("child", (), []),
            ("node", ()),
            ("child", (), []),
        ]
        first, node_part, second = clone.get_cached_parts()
        assert isinstance(first, ChildNodePart) and isinstance(second, ChildNodePart)
        assert first.next_sibling is second.previous_sibling
        assert isinstance(node_part, NodePart)
        assert node_part.node is first.next_sibling

    def test_clone_is_independent(self) -> None:
        document = parse_document(_NESTED_MARKUP)
        document_part = get_document_part(document)
        clone = document_part.clone()
        for part in clone.get_parts():
            part.disconnect()
        assert len(document_part.get_parts()) == 3

    @pytest.mark.parametrize("markup", ["", "<p></p>", "<!-- plain -->"])
    def test_without_parts(self, markup: str) -> None:
        clone = clone_parts(parse_fragment(markup))
        assert clone.get_cached_parts() == []

    def test_parts_inside_previous_boundary_stay_outside(self) -> None:
        frag = parse_fragment("<header><span></span></header><p></p><footer></footer>")
        header, _, footer = frag.child_nodes
        span = header.first_child
        assert span is not None
        document_part = get_document_part(frag)
        ChildNodePart(header, footer)
        NodePart(span)

        expected = [("child", (), []), ("node", ())]
        assert shape(document_part.get_parts()) == expected
        clone = clone_parts(frag)
        assert shape(clone.get_cached_parts()) == expected
        assert shape(clone.get_parts()) == expected

        cloned_child, cloned_node = clone.get_cached_parts()
        assert isinstance(cloned_child, ChildNodePart)
        assert cloned_child.get_parts() == cloned_child.get_cached_parts() == []
        assert isinstance(cloned_node, NodePart)
        assert cloned_node.node.parent is cloned_child.previous_sibling

    def test_parts_inside_previous_boundary_follow_the_child_node_part(self) -> None:
        frag = parse_fragment(
            "<header><?node-part in-header?><span></span></header>"
            "<?node-part between?><p></p><footer></footer>"
        )
        header = frag.child_nodes[0]
        footer = frag.child_nodes[-1]
        document_part = get_document_part(frag)
        ChildNodePart(header, footer)

        child, in_header = document_part.get_parts()
        assert isinstance(child, ChildNodePart)
        assert in_header.metadata == ["in-header"]
        assert [p.metadata for p in child.get_parts()] == [["between"]]

        clone = clone_parts(frag)
        assert shape(clone.get_cached_parts()) == [
            ("child", (), [("node", ("between",))]),
            ("node", ("in-header",)),
        ]

"""Property-based tests for part invariants using Hypothesis.

These tests build random trees and marker markup and verify that validity,
nesting, parsing and cloning keep their guarantees regardless of input.
"""

from contextlib import suppress

from hypothesis import given, settings
from hypothesis import strategies as st

from domparts import (
    ChildNodePart,
    Element,
    NodePart,
    PartConstructionError,
    get_document_part,
    parse_fragment,
    parse_parts,
    refresh_child_node_parts,
    to_html,
)
from domparts.serialization import shape

_CHILD_COUNT = 8

_metadata = st.text(alphabet="abcxyz", max_size=5)


def _marker(name: str, metadata: str) -> str:
    return f"<?{name} {metadata}?>" if metadata else f"<?{name}?>"


_items = st.recursive(
    st.one_of(
        st.just("<p></p>"),
        _metadata.map(lambda m: _marker("node-part", m) + "<p></p>"),
    ),
    lambda inner: st.one_of(
        st.lists(inner, max_size=3).map(lambda xs: "<div>" + "".join(xs) + "</div>"),
        st.tuples(_metadata, st.lists(inner, max_size=3), _metadata).map(
            lambda t: _marker("child-node-part", t[0])
            + "".join(t[1])
            + _marker("/child-node-part", t[2])
        ),
    ),
    max_leaves=12,
)
_markup = st.lists(_items, max_size=4).map("".join)

_index = st.integers(min_value=0, max_value=_CHILD_COUNT - 1)
_ranges = st.lists(st.tuples(_index, _index), max_size=6)
_moves = st.lists(st.tuples(_index, _index), max_size=3)


def _build(
    ranges: list[tuple[int, int]], moves: list[tuple[int, int]]
) -> tuple[Element, list[ChildNodePart]]:
    parent = Element("div")
    children = [parent.append_child(Element("span")) for _ in range(_CHILD_COUNT)]
    parts: list[ChildNodePart] = []
    for start, end in ranges:
        with suppress(PartConstructionError):
            parts.append(ChildNodePart(children[start], children[end]))
    for moved, reference in moves:
        if moved != reference:
            parent.insert_before(children[moved], children[reference])
    return parent, parts


class TestValidityInvariants:
    """Invariants of the per-parent scan."""

    @given(_ranges, _moves)
    @settings(max_examples=150)
    def test_refresh_is_idempotent(
        self, ranges: list[tuple[int, int]], moves: list[tuple[int, int]]
    ) -> None:
        parent, parts = _build(ranges, moves)
        refresh_child_node_parts(parent)
        first = [(p.get_cached_valid(), list(p.get_cached_owned_children())) for p in parts]
        refresh_child_node_parts(parent)
        second = [(p.get_cached_valid(), list(p.get_cached_owned_children())) for p in parts]
        assert first == second

    @given(_ranges, _moves)
    @settings(max_examples=150)
    def test_valid_parts_disjoint_or_nested(
        self, ranges: list[tuple[int, int]], moves: list[tuple[int, int]]
    ) -> None:
        parent, parts = _build(ranges, moves)
        position = {node: i for i, node in enumerate(parent.child_nodes)}
        spans = [
            (position[p.previous_sibling], position[p.next_sibling]) for p in parts if p.valid
        ]
        for start, end in spans:
            assert start < end
        for a_start, a_end in spans:
            for b_start, b_end in spans:
                disjoint = a_end <= b_start or b_end <= a_start
                nested = (a_start <= b_start and b_end <= a_end) or (
                    b_start <= a_start and a_end <= b_end
                )
                assert disjoint or nested

    @given(_ranges, _moves)
    @settings(max_examples=100)
    def test_owned_children_are_between_boundaries(
        self, ranges: list[tuple[int, int]], moves: list[tuple[int, int]]
    ) -> None:
        _, parts = _build(ranges, moves)
        for part in parts:
            owned = part.get_owned_children()
            between = part.get_children()
            assert all(child in between for child in owned)

    @given(_ranges)
    @settings(max_examples=100)
    def test_construction_never_invalidates_existing(self, ranges: list[tuple[int, int]]) -> None:
        _, parts = _build(ranges, [])
        assert all(part.valid for part in parts)


class TestMarkerInvariants:
    """Parsing and cloning preserve the part tree."""

    @given(_markup)
    @settings(max_examples=100)
    def test_well_formed_markup_round_trips(self, markup: str) -> None:
        frag = parse_fragment(markup)
        parts = parse_parts(frag)
        reparsed = parse_parts(parse_fragment(to_html(frag)))
        assert shape(reparsed) == shape(parts)

    @given(_markup)
    @settings(max_examples=100)
    def test_live_walk_matches_parse(self, markup: str) -> None:
        document_part = get_document_part(parse_fragment(markup))
        expected = shape(document_part.get_cached_parts())
        assert shape(document_part.get_parts()) == expected

    @given(_markup)
    @settings(max_examples=100)
    def test_clone_fidelity(self, markup: str) -> None:
        frag = parse_fragment(markup)
        document_part = get_document_part(frag)
        clone = document_part.clone()
        assert shape(clone.get_cached_parts()) == shape(document_part.get_cached_parts())

        original_nodes = set(frag.iter_descendants())
        for part in clone.get_parts():
            if isinstance(part, NodePart):
                assert part.node not in original_nodes
            else:
                assert part.previous_sibling not in original_nodes
                assert part.next_sibling not in original_nodes

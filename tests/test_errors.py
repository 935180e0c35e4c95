"""Error hierarchy and error-path tests.

Exercises the exception types and the operations that raise them. The
happy paths live with each module's tests.
"""

import pytest

from domparts import (
    ChildNodePart,
    DomPartsError,
    Element,
    ExistingPartError,
    InvalidPartError,
    MarkerParseError,
    NodePart,
    OverlappingPartError,
    PartConstructionError,
)

# =========================================================================
# Hierarchy
# =========================================================================


class TestHierarchy:
    """Catch-all handling works at each level."""

    @pytest.mark.parametrize(
        "error_type",
        [PartConstructionError, ExistingPartError, OverlappingPartError, InvalidPartError],
    )
    def test_all_are_domparts_errors(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, DomPartsError)

    def test_construction_subtypes(self) -> None:
        assert issubclass(ExistingPartError, PartConstructionError)
        assert issubclass(OverlappingPartError, PartConstructionError)
        assert not issubclass(InvalidPartError, PartConstructionError)

    def test_marker_error_is_not_construction_error(self) -> None:
        assert issubclass(MarkerParseError, DomPartsError)
        assert not issubclass(MarkerParseError, PartConstructionError)


# =========================================================================
# MarkerParseError formatting
# =========================================================================


class TestMarkerParseErrorFormatting:
    """MarkerParseError produces readable messages."""

    def test_message_only(self) -> None:
        err = MarkerParseError("Unterminated child node part")
        assert str(err) == "Unterminated child node part"
        assert err.marker is None

    def test_with_marker(self) -> None:
        err = MarkerParseError("Unterminated child node part", "?child-node-part?")
        assert str(err) == "Unterminated child node part at marker '?child-node-part?'"
        assert err.message == "Unterminated child node part"


# =========================================================================
# Operations that raise
# =========================================================================


class TestRaisingOperations:
    """Each error type comes from a concrete misuse."""

    def test_catch_as_base(self) -> None:
        parent = Element("div")
        node = parent.append_child(Element("p"))
        NodePart(node)
        with pytest.raises(DomPartsError):
            NodePart(node)

    def test_overlap_caught_as_construction_error(self) -> None:
        parent = Element("div")
        children = [parent.append_child(Element("p")) for _ in range(4)]
        ChildNodePart(children[0], children[2])
        with pytest.raises(PartConstructionError):
            ChildNodePart(children[1], children[3])

    def test_replace_children_on_disconnected_part(self) -> None:
        parent = Element("div")
        children = [parent.append_child(Element("p")) for _ in range(2)]
        part = ChildNodePart(children[0], children[1])
        part.disconnect()
        with pytest.raises(InvalidPartError):
            part.replace_children()

"""Comment-marker parser building a part tree.

Scans comment nodes in document order for three markers (marker names come
from the active PartsConfig):

    ?node-part <metadata>?          NodePart on the comment's next sibling
    ?child-node-part <metadata>?    opens a ChildNodePart frame
    ?/child-node-part <metadata>?   closes the innermost frame opened under
                                    the same parent

Malformed input is handled the way HTML parsing handles bad markup: a
node-part marker without a next sibling is ignored, a close marker that
matches no frame is ignored, frames left open at the end are discarded along
with the parts they collected. When a close marker matches a frame with
unclosed frames inside it, those inner frames are dropped but their parts
are kept in the matched frame.

With ``PartsConfig(strict_markers=True)`` each of these recoveries raises
MarkerParseError instead.

Example:
    >>> frag = parse_fragment(
    ...     "<?child-node-part list?><?node-part item?><li></li><?/child-node-part?>"
    ... )
    >>> [type(p).__name__ for p in parse_parts(frag)]
    ['ChildNodePart']

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache

from domparts.child_node_part import ChildNodePart
from domparts.config import get_parts_config
from domparts.dom import Comment, Node
from domparts.errors import MarkerParseError, PartConstructionError
from domparts.node_part import NodePart
from domparts.part import Part, PartInit
from domparts.utils.logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=8)
def _marker_patterns(
    node_part_marker: str, child_node_part_marker: str
) -> tuple[re.Pattern[str], re.Pattern[str]]:
    node_part = re.compile(rf"\?{re.escape(node_part_marker)}\s*(?P<metadata>.*)\?", re.DOTALL)
    child_node_part = re.compile(
        rf"\?(?P<end>/)?{re.escape(child_node_part_marker)}\s*(?P<metadata>.*)\?",
        re.DOTALL,
    )
    return node_part, child_node_part


@dataclass(slots=True)
class _Frame:
    """Parts collected at one nesting level.

    The bottom frame collects top-level parts and has no start comment.
    """

    parent: _Frame | None = None
    start_comment: Comment | None = None
    metadata: str | None = None
    parts: list[Part] = field(default_factory=list)


def parse_parts(root: Node | Sequence[Node]) -> list[Part]:
    """Create parts from the markers under ``root``.

    Args:
        root: A single node, whose descendants are scanned, or a sequence of
            nodes, each scanned together with its descendants.

    Returns:
        Top-level parts in document order; nested parts are reachable through
        ``ChildNodePart.get_cached_parts()``.

    Raises:
        MarkerParseError: only in strict marker mode.

    """
    return PartParser(root).parse()


class PartParser:
    """Single-use marker parser."""

    __slots__ = (
        "_child_node_part_re",
        "_created",
        "_frame",
        "_node_part_re",
        "_roots",
        "_strict",
    )

    def __init__(self, root: Node | Sequence[Node]) -> None:
        config = get_parts_config()
        self._node_part_re, self._child_node_part_re = _marker_patterns(
            config.node_part_marker, config.child_node_part_marker
        )
        self._strict = config.strict_markers
        self._roots = root
        self._frame = _Frame()
        self._created: list[Part] = []

    def parse(self) -> list[Part]:
        """Parse every marker under the roots.

        A strict-mode failure disconnects the parts already created before
        the MarkerParseError propagates, leaving the tree unclaimed.

        """
        try:
            for comment in self._comments():
                self._parse_comment(comment)

            while self._frame.parent is not None:
                # Unterminated: the frame and everything it collected are dropped
                self._recover("Unterminated child node part", self._frame.start_comment)
                self._frame = self._frame.parent
        except MarkerParseError:
            for part in reversed(self._created):
                part.disconnect()
            raise
        return self._frame.parts

    def _comments(self) -> list[Comment]:
        if isinstance(self._roots, Node):
            nodes = list(self._roots.iter_descendants())
        else:
            nodes = []
            for root in self._roots:
                nodes.append(root)
                nodes.extend(root.iter_descendants())
        # Snapshot first: creating parts never mutates the tree, but callers
        # may hand in a live sequence of children
        return [node for node in nodes if isinstance(node, Comment)]

    def _parse_comment(self, comment: Comment) -> None:
        data = comment.data
        if not data:
            return

        node_part_match = self._node_part_re.fullmatch(data)
        if node_part_match:
            self._parse_node_part(comment, node_part_match["metadata"] or None)
            return
        child_node_part_match = self._child_node_part_re.fullmatch(data)
        if child_node_part_match:
            metadata = child_node_part_match["metadata"] or None
            if child_node_part_match["end"]:
                self._parse_child_node_part_end(comment, metadata)
            else:
                self._frame = _Frame(parent=self._frame, start_comment=comment, metadata=metadata)

    def _parse_node_part(self, comment: Comment, metadata: str | None) -> None:
        node = comment.next_sibling
        if node is None:
            self._recover("Node part marker has no next sibling", comment)
            return
        try:
            part = NodePart(node, PartInit(metadata=[metadata] if metadata else []))
        except PartConstructionError as exc:
            self._reject(exc, comment)
            return
        self._created.append(part)
        self._frame.parts.append(part)

    def _parse_child_node_part_end(self, comment: Comment, metadata: str | None) -> None:
        frame = self._match_frame(comment)
        if frame is None:
            self._recover("Child node part end matches no open child node part", comment)
            return
        assert frame.start_comment is not None and frame.parent is not None

        combined = [m for m in (frame.metadata, metadata) if m is not None]
        try:
            part = ChildNodePart(
                frame.start_comment,
                comment,
                PartInit(metadata=combined, parts=frame.parts),
            )
        except PartConstructionError as exc:
            # Keep the collected parts at the enclosing level
            frame.parent.parts.extend(frame.parts)
            self._frame = frame.parent
            self._reject(exc, comment)
            return
        self._frame = frame.parent
        self._created.append(part)
        self._frame.parts.append(part)

    def _match_frame(self, end_comment: Comment) -> _Frame | None:
        """Find the innermost open frame started under ``end_comment``'s parent.

        Frames opened inside the match are unterminated; their parts are
        folded into the match in document order. Without a match nothing
        changes.

        """
        unmatched: list[_Frame] = []
        frame = self._frame
        while frame.parent is not None:
            assert frame.start_comment is not None
            if frame.start_comment.parent is end_comment.parent:
                for inner in reversed(unmatched):
                    self._recover("Unterminated child node part", inner.start_comment)
                    frame.parts.extend(inner.parts)
                return frame
            unmatched.append(frame)
            frame = frame.parent
        return None

    def _recover(self, message: str, comment: Comment | None) -> None:
        marker = comment.data if comment is not None else None
        if self._strict:
            raise MarkerParseError(message, marker)
        logger.debug("%s: %r", message, marker)

    def _reject(self, exc: PartConstructionError, comment: Comment) -> None:
        if self._strict:
            raise MarkerParseError(str(exc), comment.data) from exc
        logger.warning("Skipping marker %r: %s", comment.data, exc)


__all__ = ["PartParser", "parse_parts"]

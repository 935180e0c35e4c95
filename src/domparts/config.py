"""ContextVar-based configuration for domparts.

Holds the marker vocabulary and strictness used by the marker parser.
Config is set per context and read by every parser created in it.

Usage:
    from domparts.config import PartsConfig, parts_config_context

    with parts_config_context(PartsConfig(strict_markers=True)):
        document_part = get_document_part(fragment)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PartsConfig:
    """Immutable parts configuration.

    Attributes:
        node_part_marker: Marker name for a NodePart (``?node-part meta?``)
        child_node_part_marker: Marker name for ChildNodePart start/end
            (``?child-node-part meta?`` / ``?/child-node-part meta?``)
        strict_markers: Raise MarkerParseError on malformed markers instead
            of logging and skipping them

    """

    node_part_marker: str = "node-part"
    child_node_part_marker: str = "child-node-part"
    strict_markers: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PartsConfig":
        """Create PartsConfig from dictionary.

        Only includes keys that are valid PartsConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = PartsConfig.from_dict({
            ...     "strict_markers": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.strict_markers
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PartsConfig = PartsConfig()

_parts_config: ContextVar[PartsConfig] = ContextVar(
    "parts_config",
    default=_DEFAULT_CONFIG,
)


def get_parts_config() -> PartsConfig:
    """Get the active parts configuration for this context."""
    return _parts_config.get()


def set_parts_config(config: PartsConfig) -> None:
    """Set parts configuration for the current context."""
    _parts_config.set(config)


def reset_parts_config() -> None:
    """Reset to the default configuration."""
    _parts_config.set(_DEFAULT_CONFIG)


@contextmanager
def parts_config_context(config: PartsConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parts_config_context(PartsConfig(strict_markers=True)):
        ...     get_parts_config().strict_markers
        True

    """
    previous = _parts_config.get()
    _parts_config.set(config)
    try:
        yield
    finally:
        _parts_config.set(previous)


__all__ = [
    "PartsConfig",
    "get_parts_config",
    "parts_config_context",
    "reset_parts_config",
    "set_parts_config",
]

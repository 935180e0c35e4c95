"""Logger naming for domparts.

Every module logs under the ``domparts`` namespace, so one handler on
``logging.getLogger("domparts")`` sees marker recovery from the parser and
skipped parts from the cloner. Nothing is logged above DEBUG except markers
whose parts could not be constructed.

Example:
    >>> from domparts.utils.logger import get_logger
    >>> logger = get_logger("domparts.parser")
    >>> logger.debug("%s: %r", "Unterminated child node part", "?child-node-part?")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a domparts module.

    Names outside the package namespace are prefixed with ``domparts.``.

    Args:
        name: Module name, usually ``__name__``.

    Example:
        >>> get_logger("cloner").name
        'domparts.cloner'
        >>> get_logger("domparts.parser").name
        'domparts.parser'
    """
    if not (name == "domparts" or name.startswith("domparts.")):
        name = f"domparts.{name}"
    return logging.getLogger(name)

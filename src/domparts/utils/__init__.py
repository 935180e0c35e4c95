"""Utility modules for domparts.

Provides:
- logger: get_logger for logging
"""

from domparts.utils.logger import get_logger

__all__ = ["get_logger"]

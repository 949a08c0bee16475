"""Utility modules."""

from .log import Log
from .error import format_error, format_unknown_error

__all__ = ["Log", "format_error", "format_unknown_error"]

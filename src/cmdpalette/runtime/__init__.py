"""Runtime bootstrap helpers."""

from .logging import bootstrap_logging

__all__ = ["bootstrap_logging"]

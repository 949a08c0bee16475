"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

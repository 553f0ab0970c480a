"""Reusable type definitions for AAPC."""

from .base import StrictBaseModel

__all__ = [
    "StrictBaseModel",
]

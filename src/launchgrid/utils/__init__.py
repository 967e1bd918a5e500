"""Utility helpers for launchgrid."""

from .persistence import PydanticPersistence

__all__ = ["PydanticPersistence"]

"""Shared model infrastructure: JSON persistence and observer lists."""

from .observer import ObserverManager
from .persistence import PydanticPersistence

__all__ = ["ObserverManager", "PydanticPersistence"]

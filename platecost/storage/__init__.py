"""Persistence of calculator inputs between sessions."""

from .persistence import InputPersistence

__all__ = ["InputPersistence"]

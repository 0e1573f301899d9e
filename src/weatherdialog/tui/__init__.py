"""Textual simulator UI."""

from .app import DialogSimulator

__all__ = ["DialogSimulator"]

"""Command-line interface for weatherdialog."""

from .main import cli

__all__ = ["cli"]

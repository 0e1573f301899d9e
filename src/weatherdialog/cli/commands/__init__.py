"""CLI commands for weatherdialog."""

from .config import config
from .midi import midi_group
from .run import run

__all__ = ["config", "midi_group", "run"]

"""Widgets of the dialog simulator."""

from .button_panel import ButtonPanel, PanelButton
from .led_strip import LedCell, LedStripWidget
from .state_bar import StateBar

__all__ = ["ButtonPanel", "LedCell", "LedStripWidget", "PanelButton", "StateBar"]

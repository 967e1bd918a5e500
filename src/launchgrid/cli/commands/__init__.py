"""CLI commands for launchgrid."""

from .devices import list_devices, list_ports
from .led import clear_leds, fill_grid, scroll_text, send_clock, set_mode, stop_text
from .monitor import monitor

__all__ = [
    "clear_leds",
    "fill_grid",
    "list_devices",
    "list_ports",
    "monitor",
    "scroll_text",
    "send_clock",
    "set_mode",
    "stop_text",
]

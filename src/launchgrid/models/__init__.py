"""Data models for launchgrid."""

from .color import Color
from .config import AppConfig, DiscoveryConfig
from .device import LaunchpadDevice
from .leds import DeviceFamily, LaunchpadMode, LedId, LightingMode, SideLED, TopLED

__all__ = [
    "AppConfig",
    "Color",
    "DeviceFamily",
    "DiscoveryConfig",
    "LaunchpadDevice",
    "LaunchpadMode",
    "LedId",
    "LightingMode",
    "SideLED",
    "TopLED",
]

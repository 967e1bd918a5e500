"""Hardware device support."""

from .launchpad import LaunchpadController

__all__ = ["LaunchpadController"]

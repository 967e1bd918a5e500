"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from launchgrid.utils.persistence import PydanticPersistence

from .leds import LaunchpadMode

DEFAULT_CONFIG_DIR = Path.home() / ".launchgrid"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class DiscoveryConfig(BaseModel):
    """Port name matching rules used by device discovery."""

    legacy_marker: str = Field(
        default="launchpad",
        description="Substring (case-insensitive) identifying a legacy Launchpad port",
    )
    modern_markers: list[str] = Field(
        default_factory=lambda: ["lpminimk3"],
        description="Substrings (case-insensitive) identifying MiniMk3-class ports",
    )
    modern_input_marker: str = Field(default="midiin", description="Marks the input half of a pair")
    modern_output_marker: str = Field(default="midiout", description="Marks the output half of a pair")
    excluded_port_patterns: list[str] = Field(
        default_factory=lambda: ["Synth"],
        description="Ports whose name contains any of these are ignored",
    )
    excluded_port_names: list[str] = Field(
        default_factory=lambda: ["LPMiniMK3 MIDI"],
        description="Ports with exactly these names are ignored",
    )

    def is_excluded(self, port_name: str) -> bool:
        """Check whether a port is filtered out before matching."""
        if port_name in self.excluded_port_names:
            return True
        return any(pattern in port_name for pattern in self.excluded_port_patterns)


class AppConfig(BaseModel):
    """Application configuration and settings."""

    discovery: DiscoveryConfig = Field(
        default_factory=DiscoveryConfig,
        description="Port matching rules",
    )

    text_scroll_speed: int = Field(
        default=7, ge=0, le=127, description="Default text scroll speed (MIDI data byte)"
    )
    default_mode: LaunchpadMode = Field(
        default=LaunchpadMode.PROGRAMMER,
        description="Mode set right after connecting from the command line",
    )

    log_dir: Path = Field(
        default_factory=lambda: DEFAULT_CONFIG_DIR / "logs",
        description="Directory for rotating log files",
    )

    @field_serializer("log_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.launchgrid/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file (atomic write, previous file kept as .bak)."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)

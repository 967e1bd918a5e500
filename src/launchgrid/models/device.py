"""Discovered Launchpad device."""

from pydantic import BaseModel, ConfigDict, Field

from .leds import DeviceFamily


class LaunchpadDevice(BaseModel):
    """A logical Launchpad: one input port paired with one output port.

    Legacy devices expose a single port name used for both directions.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name")
    input_port_name: str = Field(description="MIDI input port name")
    output_port_name: str = Field(description="MIDI output port name")
    is_legacy: bool = Field(default=False, description="Legacy (shared port) device")

    @classmethod
    def legacy(cls, name: str) -> "LaunchpadDevice":
        """Create a legacy device whose input and output share one name."""
        return cls(name=name, input_port_name=name, output_port_name=name, is_legacy=True)

    @classmethod
    def paired(cls, output_name: str, input_name: str) -> "LaunchpadDevice":
        """Create a MiniMk3-class device from its separate ports."""
        return cls(
            name=output_name,
            input_port_name=input_name,
            output_port_name=output_name,
            is_legacy=False,
        )

    @property
    def family(self) -> DeviceFamily:
        return DeviceFamily.LEGACY if self.is_legacy else DeviceFamily.MINI_MK3

    def describe(self) -> str:
        """One-line summary for listings."""
        if self.is_legacy:
            return f"{self.name} [{self.family.display_name}]"
        return (
            f"{self.name} [{self.family.display_name}] "
            f"in='{self.input_port_name}' out='{self.output_port_name}'"
        )

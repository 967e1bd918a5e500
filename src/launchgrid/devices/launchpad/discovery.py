"""Launchpad discovery over the available MIDI ports."""

import logging
from typing import Optional

from launchgrid.midi.protocols import MidiBackend
from launchgrid.models.config import DiscoveryConfig
from launchgrid.models.device import LaunchpadDevice

logger = logging.getLogger(__name__)


class DeviceDiscovery:
    """
    Pair MIDI ports into logical Launchpad devices.

    Two families are recognised:

    - Legacy: an input and an output share the exact same name and that
      name contains the legacy marker ("launchpad").
    - Mini MK3 class: an input containing a family marker and "midiin",
      paired with an output containing the same marker and "midiout".

    Each pass over the unclaimed ports adds at most one device and claims
    its ports, so no port ends up in two devices. Discovery stops on the
    first pass that finds nothing.
    """

    def __init__(self, backend: MidiBackend, config: Optional[DiscoveryConfig] = None):
        self._backend = backend
        self._config = config or DiscoveryConfig()

    def discover(self) -> list[LaunchpadDevice]:
        """
        Find all Launchpads currently attached.

        Returns:
            Devices sorted by input port name (empty if none found)
        """
        inputs = [n for n in self._backend.input_names() if not self._config.is_excluded(n)]
        outputs = [n for n in self._backend.output_names() if not self._config.is_excluded(n)]
        logger.debug(f"Discovery candidates: inputs={inputs} outputs={outputs}")

        devices: list[LaunchpadDevice] = []
        claimed_inputs: set[str] = set()
        claimed_outputs: set[str] = set()

        while True:
            free_inputs = [n for n in inputs if n not in claimed_inputs]
            free_outputs = [n for n in outputs if n not in claimed_outputs]

            device = self._find_legacy(free_inputs, free_outputs) or self._find_paired(
                free_inputs, free_outputs
            )
            if device is None:
                break

            logger.info(f"Discovered Launchpad: {device.describe()}")
            devices.append(device)
            claimed_inputs.add(device.input_port_name)
            claimed_outputs.add(device.output_port_name)

        return sorted(devices, key=lambda d: d.input_port_name)

    def _find_legacy(self, inputs: list[str], outputs: list[str]) -> Optional[LaunchpadDevice]:
        marker = self._config.legacy_marker.lower()
        for name in inputs:
            if name in outputs and marker in name.lower():
                return LaunchpadDevice.legacy(name)
        return None

    def _find_paired(self, inputs: list[str], outputs: list[str]) -> Optional[LaunchpadDevice]:
        in_marker = self._config.modern_input_marker.lower()
        out_marker = self._config.modern_output_marker.lower()

        for family_marker in (m.lower() for m in self._config.modern_markers):
            input_name = next(
                (n for n in inputs if family_marker in n.lower() and in_marker in n.lower()), None
            )
            output_name = next(
                (n for n in outputs if family_marker in n.lower() and out_marker in n.lower()), None
            )
            if input_name and output_name:
                return LaunchpadDevice.paired(output_name, input_name)
        return None

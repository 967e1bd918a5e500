"""mido implementation of the MIDI backend."""

import logging
from typing import Optional

import mido

from launchgrid.exceptions import wrap_transport_error

from .ports import MidoInputPort, MidoOutputPort

logger = logging.getLogger(__name__)


class MidoBackend:
    """
    Port enumeration and port creation through mido.

    Args:
        backend_name: Optional mido backend module (e.g. "mido.backends.rtmidi").
                      If None, mido's default backend is used.
    """

    def __init__(self, backend_name: Optional[str] = None):
        self._api = mido.Backend(backend_name) if backend_name else mido

    def input_names(self) -> list[str]:
        try:
            return list(self._api.get_input_names())
        except Exception as e:
            logger.error(f"Could not list MIDI inputs: {e}")
            raise wrap_transport_error(e, "list inputs") from e

    def output_names(self) -> list[str]:
        try:
            return list(self._api.get_output_names())
        except Exception as e:
            logger.error(f"Could not list MIDI outputs: {e}")
            raise wrap_transport_error(e, "list outputs") from e

    def input_port(self, name: str) -> MidoInputPort:
        return MidoInputPort(name, api=self._api)

    def output_port(self, name: str) -> MidoOutputPort:
        return MidoOutputPort(name, api=self._api)

    def list_ports(self) -> tuple[list[str], list[str]]:
        """Return (input names, output names)."""
        return self.input_names(), self.output_names()

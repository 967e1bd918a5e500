"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from launchgrid.devices.launchpad import LaunchpadController
from launchgrid.exceptions import TransportFailureError
from launchgrid.models import LaunchpadDevice

MINI_MK3_IN = "MIDIIN2 (LPMiniMK3 MIDI)"
MINI_MK3_OUT = "MIDIOUT2 (LPMiniMK3 MIDI)"
LEGACY_NAME = "Launchpad Mini"


class FakeInput:
    """In-memory MIDI input. ``feed_*`` simulates traffic from the device."""

    def __init__(self, name: str, fail_open: bool = False):
        self.name = name
        self.is_open = False
        self.receiving = False
        self.fail_open = fail_open
        self.note_handler = None
        self.cc_handler = None

    def open(self):
        if self.fail_open:
            raise TransportFailureError("open input", port_name=self.name, original_error="busy")
        self.is_open = True

    def close(self):
        self.is_open = False

    def on_note(self, handler):
        self.note_handler = handler

    def on_control_change(self, handler):
        self.cc_handler = handler

    def start_receiving(self):
        self.receiving = True

    def stop_receiving(self):
        self.receiving = False

    def feed_note(self, note: int, velocity: int):
        if self.receiving and self.note_handler:
            self.note_handler(note, velocity)

    def feed_cc(self, control: int, value: int):
        if self.receiving and self.cc_handler:
            self.cc_handler(control, value)


class FakeOutput:
    """In-memory MIDI output recording everything sent."""

    def __init__(self, name: str, fail_open: bool = False):
        self.name = name
        self.is_open = False
        self.fail_open = fail_open
        self.fail_send = False
        self.sent: list[tuple] = []

    def open(self):
        if self.fail_open:
            raise TransportFailureError("open output", port_name=self.name, original_error="busy")
        self.is_open = True

    def close(self):
        self.is_open = False

    def send_note(self, channel: int, note: int, velocity: int):
        if self.fail_send:
            raise TransportFailureError("send", port_name=self.name, original_error="unplugged")
        self.sent.append(("note", channel, note, velocity))

    def send_sysex(self, packet):
        if self.fail_send:
            raise TransportFailureError("send", port_name=self.name, original_error="unplugged")
        self.sent.append(("sysex", list(packet)))

    @property
    def sysex_packets(self) -> list[list[int]]:
        return [entry[1] for entry in self.sent if entry[0] == "sysex"]

    @property
    def notes(self) -> list[tuple[int, int, int]]:
        return [entry[1:] for entry in self.sent if entry[0] == "note"]


class FakeBackend:
    """MIDI backend over fixed port name lists."""

    def __init__(self, inputs=(), outputs=(), fail_inputs=(), fail_outputs=()):
        self._inputs = list(inputs)
        self._outputs = list(outputs)
        self._fail_inputs = set(fail_inputs)
        self._fail_outputs = set(fail_outputs)
        self.opened_inputs: dict[str, FakeInput] = {}
        self.opened_outputs: dict[str, FakeOutput] = {}

    def input_names(self):
        return list(self._inputs)

    def output_names(self):
        return list(self._outputs)

    def list_ports(self):
        return self.input_names(), self.output_names()

    def input_port(self, name):
        port = FakeInput(name, fail_open=name in self._fail_inputs)
        self.opened_inputs[name] = port
        return port

    def output_port(self, name):
        port = FakeOutput(name, fail_open=name in self._fail_outputs)
        self.opened_outputs[name] = port
        return port


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mini_mk3_backend():
    """Backend exposing one Mini MK3 (plus its excluded ports)."""
    return FakeBackend(
        inputs=["LPMiniMK3 MIDI", MINI_MK3_IN, "Microsoft GS Wavetable Synth"],
        outputs=["LPMiniMK3 MIDI", MINI_MK3_OUT, "Microsoft GS Wavetable Synth"],
    )


@pytest.fixture
def legacy_backend():
    """Backend exposing one legacy Launchpad."""
    return FakeBackend(inputs=[LEGACY_NAME], outputs=[LEGACY_NAME])


@pytest.fixture
def mini_mk3_device():
    return LaunchpadDevice.paired(MINI_MK3_OUT, MINI_MK3_IN)


@pytest.fixture
def legacy_device():
    return LaunchpadDevice.legacy(LEGACY_NAME)


@pytest.fixture
def mk3_controller(mini_mk3_backend, mini_mk3_device):
    """Controller connected to a Mini MK3."""
    controller = LaunchpadController(backend=mini_mk3_backend)
    assert controller.connect(mini_mk3_device)
    yield controller
    controller.close()


@pytest.fixture
def legacy_controller(legacy_backend, legacy_device):
    """Controller connected to a legacy Launchpad."""
    controller = LaunchpadController(backend=legacy_backend)
    assert controller.connect(legacy_device)
    yield controller
    controller.close()


@pytest.fixture
def mk3_output(mk3_controller, mini_mk3_backend):
    return mini_mk3_backend.opened_outputs[MINI_MK3_OUT]


@pytest.fixture
def mk3_input(mk3_controller, mini_mk3_backend):
    return mini_mk3_backend.opened_inputs[MINI_MK3_IN]


@pytest.fixture
def legacy_output(legacy_controller, legacy_backend):
    return legacy_backend.opened_outputs[LEGACY_NAME]

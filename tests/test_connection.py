"""Tests for the connection lifecycle."""

from unittest.mock import Mock

import pytest

from conftest import LEGACY_NAME, MINI_MK3_IN, MINI_MK3_OUT, FakeBackend
from launchgrid.devices.launchpad import ConnectionManager, ConnectionState, EventDispatcher
from launchgrid.exceptions import DeviceNotConnectedError, TransportFailureError
from launchgrid.models import DeviceFamily, LaunchpadDevice


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.mark.unit
class TestConnect:
    """Test opening devices."""

    def test_connect_mini_mk3(self, mini_mk3_backend, mini_mk3_device, dispatcher):
        manager = ConnectionManager(mini_mk3_backend, dispatcher)

        assert manager.connect(mini_mk3_device)

        connection = manager.connection
        assert connection.connected
        assert connection.state is ConnectionState.CONNECTED
        assert connection.sysex_header == DeviceFamily.MINI_MK3.sysex_header
        assert not connection.is_legacy
        assert manager.is_connected

        port = mini_mk3_backend.opened_inputs[MINI_MK3_IN]
        assert port.is_open
        assert port.receiving
        assert port.note_handler == dispatcher.handle_note
        assert port.cc_handler == dispatcher.handle_control_change
        assert mini_mk3_backend.opened_outputs[MINI_MK3_OUT].is_open

    def test_connect_legacy(self, legacy_backend, legacy_device, dispatcher):
        manager = ConnectionManager(legacy_backend, dispatcher)

        assert manager.connect(legacy_device)
        assert manager.connection.is_legacy
        assert manager.connection.sysex_header[-1] == 0x18

    def test_port_names_match_case_insensitively(self, dispatcher):
        backend = FakeBackend(inputs=["LAUNCHPAD MINI"], outputs=["LAUNCHPAD MINI"])
        manager = ConnectionManager(backend, dispatcher)

        assert manager.connect(LaunchpadDevice.legacy("launchpad mini"))
        assert "LAUNCHPAD MINI" in backend.opened_inputs

    def test_missing_port_is_not_connected(self, dispatcher):
        backend = FakeBackend(inputs=[MINI_MK3_IN], outputs=[])
        manager = ConnectionManager(backend, dispatcher)

        assert not manager.connect(LaunchpadDevice.paired(MINI_MK3_OUT, MINI_MK3_IN))
        assert not manager.is_connected
        # The half that did open is closed again
        assert not backend.opened_inputs[MINI_MK3_IN].is_open

    def test_output_open_failure_rolls_back_input(self, dispatcher):
        backend = FakeBackend(
            inputs=[MINI_MK3_IN], outputs=[MINI_MK3_OUT], fail_outputs=[MINI_MK3_OUT]
        )
        manager = ConnectionManager(backend, dispatcher)

        assert not manager.connect(LaunchpadDevice.paired(MINI_MK3_OUT, MINI_MK3_IN))
        assert manager.connection.state is ConnectionState.DISCONNECTED
        assert not backend.opened_inputs[MINI_MK3_IN].is_open
        assert not backend.opened_inputs[MINI_MK3_IN].receiving

    def test_input_open_failure(self, dispatcher):
        backend = FakeBackend(
            inputs=[MINI_MK3_IN], outputs=[MINI_MK3_OUT], fail_inputs=[MINI_MK3_IN]
        )
        manager = ConnectionManager(backend, dispatcher)

        assert not manager.connect(LaunchpadDevice.paired(MINI_MK3_OUT, MINI_MK3_IN))
        assert not manager.is_connected

    def test_connect_replaces_previous(self, dispatcher):
        backend = FakeBackend(
            inputs=["Launchpad A", "Launchpad B"], outputs=["Launchpad A", "Launchpad B"]
        )
        manager = ConnectionManager(backend, dispatcher)
        manager.connect(LaunchpadDevice.legacy("Launchpad A"))

        assert manager.connect(LaunchpadDevice.legacy("Launchpad B"))
        assert not backend.opened_outputs["Launchpad A"].is_open
        assert manager.connection.device.name == "Launchpad B"


@pytest.mark.unit
class TestDisconnect:
    """Test closing devices."""

    def test_disconnect(self, mini_mk3_backend, mini_mk3_device, dispatcher):
        manager = ConnectionManager(mini_mk3_backend, dispatcher)
        manager.connect(mini_mk3_device)

        assert manager.disconnect(mini_mk3_device)

        assert not manager.is_connected
        assert not manager.connection.connected
        assert manager.connection.state is ConnectionState.DISCONNECTED
        port = mini_mk3_backend.opened_inputs[MINI_MK3_IN]
        assert not port.is_open
        assert not port.receiving
        assert not mini_mk3_backend.opened_outputs[MINI_MK3_OUT].is_open

    def test_close_failure_is_logged(self, mini_mk3_backend, mini_mk3_device, dispatcher, caplog):
        """A port that fails to close is reported, the other one is still closed."""
        manager = ConnectionManager(mini_mk3_backend, dispatcher)
        manager.connect(mini_mk3_device)
        output = mini_mk3_backend.opened_outputs[MINI_MK3_OUT]
        output.close = Mock(side_effect=TransportFailureError("close output", port_name=MINI_MK3_OUT))

        assert not manager.disconnect(mini_mk3_device)

        assert not mini_mk3_backend.opened_inputs[MINI_MK3_IN].is_open
        assert not manager.is_connected
        assert f"Failed to close {MINI_MK3_OUT}" in caplog.text

    def test_open_failure_is_logged(self, dispatcher, caplog):
        backend = FakeBackend(
            inputs=[MINI_MK3_IN], outputs=[MINI_MK3_OUT], fail_inputs=[MINI_MK3_IN]
        )
        manager = ConnectionManager(backend, dispatcher)
        device = LaunchpadDevice.paired(MINI_MK3_OUT, MINI_MK3_IN)

        assert not manager.connect(device)
        assert f"Failed to connect {device.name}" in caplog.text

    def test_disconnect_twice_is_noop(self, legacy_backend, legacy_device, dispatcher):
        manager = ConnectionManager(legacy_backend, dispatcher)
        manager.connect(legacy_device)

        assert manager.disconnect(legacy_device)
        assert manager.disconnect(legacy_device)
        assert not manager.is_connected

    def test_disconnect_never_connected(self, legacy_backend, legacy_device, dispatcher):
        manager = ConnectionManager(legacy_backend, dispatcher)
        assert manager.disconnect(legacy_device)

    def test_require_connection(self, legacy_backend, legacy_device, dispatcher):
        manager = ConnectionManager(legacy_backend, dispatcher)

        with pytest.raises(DeviceNotConnectedError) as exc_info:
            manager.require_connection("set mode")
        assert "set mode" in exc_info.value.user_message

        manager.connect(legacy_device)
        assert manager.require_connection("set mode") is manager.connection

        manager.disconnect(legacy_device)
        with pytest.raises(DeviceNotConnectedError):
            manager.require_connection("set mode")

    def test_input_delivery_stops_after_disconnect(self, legacy_backend, legacy_device, dispatcher):
        from launchgrid.protocols import LaunchpadEvent

        received = []
        dispatcher.add_listener(LaunchpadEvent.KEY_PRESSED, received.append)
        manager = ConnectionManager(legacy_backend, dispatcher)
        manager.connect(legacy_device)
        port = legacy_backend.opened_inputs[LEGACY_NAME]

        port.feed_note(81, 127)
        manager.disconnect(legacy_device)
        port.feed_note(81, 127)

        assert len(received) == 1

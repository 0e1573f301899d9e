"""Tests for the Launchpad MIDI layer (ports mocked, no hardware needed)."""

from unittest.mock import Mock, patch

import mido
import pytest

from weatherdialog.devices import InputSource, LedDriver
from weatherdialog.midi import LaunchpadSysEx, MidiButtonInput, MidiLedDriver, MidiManager
from weatherdialog.midi.sysex import PALETTE, LightingMode, nearest_palette_index
from weatherdialog.models import LED_ON, BlinkMode, ButtonEvent, Color, MidiConfig
from weatherdialog.protocols import DeviceEvent, DeviceObserver


@pytest.mark.unit
class TestLaunchpadSysEx:
    """SysEx message building."""

    @pytest.mark.parametrize(
        "model, model_byte", [("x", 0x0C), ("mini_mk3", 0x0D), ("pro_mk3", 0x0E)]
    )
    def test_programmer_mode(self, model, model_byte):
        msg = LaunchpadSysEx(model).programmer_mode(enable=True)
        assert msg.type == "sysex"
        assert list(msg.data) == [0x00, 0x20, 0x29, 0x02, model_byte, 0x0E, 0x01]

    def test_programmer_mode_disable(self):
        msg = LaunchpadSysEx().programmer_mode(enable=False)
        assert list(msg.data)[-1] == 0x00

    def test_rgb_spec(self):
        spec = LaunchpadSysEx.color_spec(11, Color(r=255, g=128, b=0))
        assert spec == (LightingMode.RGB.value, 11, 127, 64, 0)

    def test_blink_spec_uses_palette(self):
        spec = LaunchpadSysEx.color_spec(12, Color.from_name("green"), BlinkMode.BLINK)
        assert spec == (LightingMode.FLASHING.value, 12, 0, PALETTE["green"])

    def test_pulse_spec_uses_palette(self):
        spec = LaunchpadSysEx.color_spec(13, Color.from_name("pink"), BlinkMode.PULSE)
        assert spec == (LightingMode.PULSING.value, 13, PALETTE["pink"])

    def test_led_lighting_concatenates_specs(self):
        sysex = LaunchpadSysEx("mini_mk3")
        msg = sysex.led_lighting([(3, 11, 1, 2, 3), (0, 12, 5)])
        assert list(msg.data) == [0x00, 0x20, 0x29, 0x02, 0x0D, 0x03, 3, 11, 1, 2, 3, 0, 12, 5]

    def test_nearest_palette_index(self):
        assert nearest_palette_index(Color(r=250, g=10, b=10)) == PALETTE["red"]
        assert nearest_palette_index(Color.off()) == PALETTE["black"]


@pytest.mark.unit
class TestMidiButtonInput:
    """Note messages to button events."""

    @pytest.fixture
    def midi(self):
        return Mock(spec=MidiManager)

    @pytest.fixture
    def buttons(self, midi):
        return MidiButtonInput(midi, {81: 0, 82: 1, 71: 8})

    def test_is_input_source(self, buttons):
        assert isinstance(buttons, InputSource)

    def test_note_on_is_press(self, buttons):
        msg = mido.Message("note_on", note=82, velocity=100)
        assert buttons.parse_message(msg) == (ButtonEvent.PRESSED, 1)

    def test_note_on_zero_velocity_is_release(self, buttons):
        msg = mido.Message("note_on", note=81, velocity=0)
        assert buttons.parse_message(msg) == (ButtonEvent.RELEASED, 0)

    def test_note_off_is_release(self, buttons):
        msg = mido.Message("note_off", note=71)
        assert buttons.parse_message(msg) == (ButtonEvent.RELEASED, 8)

    def test_unmapped_note(self, buttons):
        assert buttons.parse_message(mido.Message("note_on", note=11, velocity=100)) is None

    def test_other_messages(self, buttons):
        assert buttons.parse_message(mido.Message("control_change", control=91, value=127)) is None

    def test_callback(self, buttons, midi):
        callback = Mock()
        buttons.on_button(callback)
        buttons.start()
        midi.on_message.assert_called_once_with(buttons.handle_message)

        buttons.handle_message(mido.Message("note_on", note=82, velocity=90))
        callback.assert_called_once_with(ButtonEvent.PRESSED, 1)

    def test_default_config_covers_all_buttons(self):
        assert sorted(MidiConfig().button_notes.values()) == list(range(10))


@pytest.mark.unit
class TestMidiLedDriver:
    """Strip rendering on Launchpad pads."""

    @pytest.fixture
    def midi(self):
        midi = Mock(spec=MidiManager)
        midi.send.return_value = True
        return midi

    @pytest.fixture
    def driver(self, midi):
        return MidiLedDriver(midi, MidiConfig().led_notes, "mini_mk3")

    def test_is_led_driver(self, driver):
        assert isinstance(driver, LedDriver)

    def test_render_sends_one_spec(self, driver, midi):
        driver.render(0, LED_ON)
        msg = midi.send.call_args.args[0]
        assert list(msg.data) == [0x00, 0x20, 0x29, 0x02, 0x0D, 0x03, 3, 11, 127, 127, 127]

    def test_render_uses_configured_notes(self, driver, midi):
        driver.render(8, LED_ON)
        msg = midi.send.call_args.args[0]
        # second grid row starts at note 21
        assert list(msg.data)[7] == 21

    def test_all_set_color_sends_full_frame(self, driver, midi):
        driver.all_set_color("green", BlinkMode.BLINK)
        msg = midi.send.call_args.args[0]
        assert len(msg.data) == 6 + 30 * 4

    def test_reconnect_redraws(self, driver, midi):
        driver.render(3, LED_ON)
        midi.send.reset_mock()

        driver.on_device_event(DeviceEvent.CONTROLLER_CONNECTED, "Launchpad Mini MK3 LPMiniMK3 MIDI")

        first, second = (c.args[0] for c in midi.send.call_args_list)
        assert list(first.data)[-2:] == [0x0E, 0x01]
        assert len(second.data) == 6 + 30 * 5

    def test_disconnect_does_nothing(self, driver, midi):
        driver.on_device_event(DeviceEvent.CONTROLLER_DISCONNECTED, "Launchpad")
        midi.send.assert_not_called()

    def test_shutdown_clears_and_leaves_programmer_mode(self, driver, midi):
        driver.shutdown()
        last = midi.send.call_args.args[0]
        assert list(last.data)[-2:] == [0x0E, 0x00]

    def test_send_while_disconnected(self, driver, midi):
        midi.send.return_value = False
        driver.render(0, LED_ON)


@pytest.mark.unit
class TestMidiManager:
    """Hot-plug port handling (mido mocked)."""

    @patch("weatherdialog.midi.manager.mido")
    def test_connects_to_matching_port(self, mock_mido):
        mock_mido.get_output_names.return_value = ["Other Synth", "Launchpad Mini MK3 MIDI"]
        port = Mock()
        port.name = "Launchpad Mini MK3 MIDI"
        mock_mido.open_output.return_value = port

        manager = MidiManager("launchpad")
        observer = Mock(spec=DeviceObserver)
        manager.register_observer(observer)
        manager._output.poll_once()

        mock_mido.open_output.assert_called_once_with("Launchpad Mini MK3 MIDI")
        assert manager.current_output_port == "Launchpad Mini MK3 MIDI"
        observer.on_device_event.assert_called_once_with(
            DeviceEvent.CONTROLLER_CONNECTED, "Launchpad Mini MK3 MIDI"
        )

    @patch("weatherdialog.midi.manager.mido")
    def test_disconnect_is_reported(self, mock_mido):
        port = Mock()
        port.name = "Launchpad X"
        mock_mido.get_output_names.return_value = ["Launchpad X"]
        mock_mido.open_output.return_value = port

        manager = MidiManager()
        observer = Mock(spec=DeviceObserver)
        manager.register_observer(observer)
        manager._output.poll_once()

        mock_mido.get_output_names.return_value = []
        manager._output.poll_once()

        port.close.assert_called_once()
        assert manager.current_output_port is None
        observer.on_device_event.assert_called_with(DeviceEvent.CONTROLLER_DISCONNECTED, "Launchpad X")

    @patch("weatherdialog.midi.manager.mido")
    def test_send_without_port(self, mock_mido):
        mock_mido.get_output_names.return_value = []
        manager = MidiManager()
        manager._output.poll_once()
        assert manager.send(mido.Message("note_on", note=11)) is False

    @patch("weatherdialog.midi.manager.mido")
    def test_send_with_port(self, mock_mido):
        port = Mock()
        port.name = "Launchpad X"
        mock_mido.get_output_names.return_value = ["Launchpad X"]
        mock_mido.open_output.return_value = port
        manager = MidiManager()
        manager._output.poll_once()

        msg = mido.Message("note_on", note=11)
        assert manager.send(msg) is True
        port.send.assert_called_once_with(msg)

    @patch("weatherdialog.midi.manager.mido")
    def test_input_messages_reach_callback(self, mock_mido):
        port = Mock()
        port.name = "Launchpad X"
        mock_mido.get_input_names.return_value = ["Launchpad X"]
        mock_mido.open_input.return_value = port
        manager = MidiManager()
        callback = Mock()
        manager.on_message(callback)
        manager._input.poll_once()

        midi_callback = mock_mido.open_input.call_args.kwargs["callback"]
        msg = mido.Message("note_on", note=81, velocity=100)
        midi_callback(msg)
        callback.assert_called_once_with(msg)

    @patch("weatherdialog.midi.manager.mido")
    def test_list_ports(self, mock_mido):
        mock_mido.get_input_names.return_value = ["in"]
        mock_mido.get_output_names.return_value = ["out"]
        assert MidiManager.list_ports() == {"input": ["in"], "output": ["out"]}

"""MIDI port management with hot-plug support."""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

import mido

from weatherdialog.model_manager import ObserverManager
from weatherdialog.protocols import DeviceEvent, DeviceObserver

logger = logging.getLogger(__name__)

PortType = TypeVar("PortType", bound=mido.ports.BaseIOPort)


class HotPlugPort(ABC, Generic[PortType]):
    """
    One MIDI port kept open across unplug/replug.

    A daemon thread polls the port list every ``poll_interval`` seconds,
    closes the port when its device disappears and opens the first port
    whose name passes ``device_filter`` when none is open.
    """

    port_type = "port"

    def __init__(
        self,
        device_filter: Callable[[str], bool],
        poll_interval: float = 2.0,
        on_connection_changed: Callable[[bool, str], None] | None = None,
    ):
        self._device_filter = device_filter
        self._poll_interval = poll_interval
        self._on_connection_changed = on_connection_changed
        self._running = False
        self._monitor_thread: threading.Thread | None = None
        self._port: PortType | None = None
        self._port_lock = threading.Lock()
        self._no_device_warned = False

    @abstractmethod
    def _get_available_ports(self) -> list[str]:
        ...

    @abstractmethod
    def _open_port(self, port_name: str) -> PortType:
        ...

    def start(self) -> None:
        if self._running:
            logger.warning(f"MIDI {self.port_type} monitor is already running")
            return
        self._running = True
        self._monitor_thread = threading.Thread(target=self._monitor_devices, daemon=True)
        self._monitor_thread.start()
        logger.debug(f"MIDI {self.port_type} monitor started")

    def stop(self) -> None:
        self._running = False
        with self._port_lock:
            if self._port:
                try:
                    self._port.close()
                except Exception as e:
                    logger.error(f"Error closing MIDI {self.port_type} port: {e}")
                self._port = None

        if self._monitor_thread and self._monitor_thread.is_alive():
            self._monitor_thread.join(timeout=1.0)
        logger.debug(f"MIDI {self.port_type} monitor stopped")

    @property
    def is_connected(self) -> bool:
        with self._port_lock:
            return self._port is not None

    @property
    def current_port(self) -> str | None:
        with self._port_lock:
            return self._port.name if self._port else None

    def poll_once(self) -> None:
        """Run one connect/disconnect check."""
        available = set(self._get_available_ports())
        changed: tuple[bool, str] | None = None

        with self._port_lock:
            if self._port and self._port.name not in available:
                name = self._port.name
                logger.warning(f"MIDI {self.port_type} disconnected: {name}")
                try:
                    self._port.close()
                except Exception as e:
                    logger.debug(f"Ignoring close error on vanished port {name}: {e}")
                self._port = None
                self._no_device_warned = False
                changed = (False, name)

            if not self._port:
                matching = sorted(p for p in available if self._device_filter(p))
                if matching:
                    try:
                        self._port = self._open_port(matching[0])
                        logger.info(f"Connected to MIDI {self.port_type}: {matching[0]}")
                        changed = (True, matching[0])
                    except Exception as e:
                        logger.error(f"Failed to connect to {matching[0]}: {e}")
                        self._port = None
                elif not self._no_device_warned:
                    logger.warning(f"No matching MIDI {self.port_type} device found")
                    self._no_device_warned = True

        # Outside the lock: the callback may send on this port
        if changed and self._on_connection_changed:
            try:
                self._on_connection_changed(*changed)
            except Exception as e:
                logger.error(f"Error in connection callback: {e}", exc_info=True)

    def _monitor_devices(self) -> None:
        while self._running:
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Error in MIDI {self.port_type} monitoring: {e}")
            time.sleep(self._poll_interval)


class MidiInputPort(HotPlugPort[mido.ports.BaseInput]):
    """Input side; messages are delivered on mido's I/O thread."""

    port_type = "input"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._message_callback: Callable[[mido.Message], None] | None = None

    def on_message(self, callback: Callable[[mido.Message], None]) -> None:
        self._message_callback = callback

    def _get_available_ports(self) -> list[str]:
        return mido.get_input_names()

    def _open_port(self, port_name: str) -> mido.ports.BaseInput:
        return mido.open_input(port_name, callback=self._midi_callback)

    def _midi_callback(self, msg: mido.Message) -> None:
        try:
            if self._message_callback:
                self._message_callback(msg)
        except Exception as e:
            logger.error(f"Error in MIDI input callback: {e}", exc_info=True)


class MidiOutputPort(HotPlugPort[mido.ports.BaseOutput]):
    """Output side."""

    port_type = "output"

    def _get_available_ports(self) -> list[str]:
        return mido.get_output_names()

    def _open_port(self, port_name: str) -> mido.ports.BaseOutput:
        return mido.open_output(port_name)

    def send(self, message: mido.Message) -> bool:
        """
        Returns:
            True if sent, False if not connected or the send failed
        """
        with self._port_lock:
            if not self._port:
                return False
            try:
                self._port.send(message)
                return True
            except Exception as e:
                logger.error(f"Error sending MIDI message: {e}")
                return False


class MidiManager:
    """
    Input and output port of one controller, with connection events.

    Connection changes are reported to DeviceObservers from the monitor
    threads.
    """

    def __init__(self, port_filter: str = "Launchpad", poll_interval: float = 2.0):
        """
        Args:
            port_filter: Case-insensitive substring a port name must contain
            poll_interval: How often to check for device changes (seconds)
        """
        self.port_filter = port_filter
        self._observers = ObserverManager[DeviceObserver](observer_type_name="device")
        self._input = MidiInputPort(self._matches, poll_interval, self._input_changed)
        self._output = MidiOutputPort(self._matches, poll_interval, self._output_changed)

    def _matches(self, port_name: str) -> bool:
        return self.port_filter.lower() in port_name.lower()

    def register_observer(self, observer: DeviceObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: DeviceObserver) -> None:
        self._observers.unregister(observer)

    def on_message(self, callback: Callable[[mido.Message], None]) -> None:
        """Register the callback for incoming messages (runs on mido's I/O thread)."""
        self._input.on_message(callback)

    def send(self, message: mido.Message) -> bool:
        return self._output.send(message)

    def start(self) -> None:
        self._input.start()
        self._output.start()
        logger.debug("MidiManager started")

    def stop(self) -> None:
        self._input.stop()
        self._output.stop()
        logger.debug("MidiManager stopped")

    @property
    def is_connected(self) -> bool:
        return self._input.is_connected and self._output.is_connected

    @property
    def current_input_port(self) -> str | None:
        return self._input.current_port

    @property
    def current_output_port(self) -> str | None:
        return self._output.current_port

    def _input_changed(self, connected: bool, port_name: str) -> None:
        # Output drives the LEDs, so only its connection is announced
        logger.debug(f"Input {'connected' if connected else 'disconnected'}: {port_name}")

    def _output_changed(self, connected: bool, port_name: str) -> None:
        event = DeviceEvent.CONTROLLER_CONNECTED if connected else DeviceEvent.CONTROLLER_DISCONNECTED
        self._observers.notify("on_device_event", event, port_name)

    @staticmethod
    def list_ports() -> dict[str, list[str]]:
        """All MIDI port names, keyed 'input' and 'output'."""
        return {
            "input": mido.get_input_names(),
            "output": mido.get_output_names(),
        }

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

"""Observer protocol definitions for domain-specific events."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from weatherdialog.models import BlinkMode, Color

from .events import DeviceEvent, DialogEvent


@runtime_checkable
class DialogObserver(Protocol):
    """
    Observer that receives dialog controller events.

    The simulator UI and audit logging subscribe through this protocol.
    """

    def on_dialog_event(self, event: DialogEvent, **kwargs: Any) -> None:
        """
        Handle dialog events.

        Args:
            event: The type of dialog event
            **kwargs: Event payload, see DialogEvent for the keys of each event

        Note:
            Called on the event loop thread, in the middle of a transition.
            Implementations must not call back into the controller.
        """
        ...


@runtime_checkable
class StripObserver(Protocol):
    """Observer that receives physical LED changes from the in-memory strip."""

    def on_led_changed(self, index: int, color: "Color", blink: "BlinkMode") -> None:
        """
        Handle a single LED change.

        Args:
            index: Physical LED index (0-29)
            color: New colour
            blink: New animation mode
        """
        ...


@runtime_checkable
class DeviceObserver(Protocol):
    """Observer that receives MIDI hot-plug events."""

    def on_device_event(self, event: DeviceEvent, port_name: str) -> None:
        """
        Handle device connection changes.

        Note:
            This is called from the MIDI monitor thread.
        """
        ...

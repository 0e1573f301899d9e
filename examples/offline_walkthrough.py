"""Offline example: walk a visitor through the whole dialog on a virtual clock."""

import logging

from weatherdialog.core import DialogController, VirtualScheduler
from weatherdialog.devices import LedStrip
from weatherdialog.models import ButtonEvent
from weatherdialog.speech import SimulatedSpeechEngine


def show(strip: LedStrip) -> str:
    """Strip as three rows of ten, floor 3 on top."""
    rows = []
    for floor in (3, 2, 1):
        start = (floor - 1) * 10
        cells = "".join("#" if strip.is_lit(i) else "." for i in range(start, start + 10))
        rows.append(f"  floor {floor}  {cells}")
    return "\n".join(rows)


def main():
    """Select floors, move the counters and leave the summary."""
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    scheduler = VirtualScheduler()
    strip = LedStrip()
    speech = SimulatedSpeechEngine(scheduler, words_per_minute=180)
    controller = DialogController(strip, speech, scheduler)

    def press(*buttons):
        for button in buttons:
            controller.dispatch(ButtonEvent.PRESSED, button)

    def release(*buttons):
        for button in buttons:
            controller.dispatch(ButtonEvent.RELEASED, button)

    def tap(button, times=1):
        for _ in range(times):
            press(button)
            release(button)

    def hold(pair):
        press(*pair)
        scheduler.advance(3000)
        release(*pair)
        # let the narration finish
        scheduler.advance(10_000)

    controller.start()

    hold((1, 2))          # ground floor 1 -> welcome -> rain
    tap(6, times=4)       # rain 4
    print(show(strip))

    hold((3, 4))          # floor 2 -> wind
    tap(2, times=7)       # wind 7
    print(show(strip))

    hold((5, 6))          # floor 3 -> hour
    tap(4, times=2)
    hold((1, 2))          # floor 1 -> pollution
    tap(6)
    hold((3, 4))          # floor 2 -> summary

    print(f"\nState: {controller.state.value}")
    print("Counts:", {mode.value: count for mode, count in controller.counts.items()})

    tap(0, times=4)       # exit gesture
    print(f"State: {controller.state.value}")
    print(show(strip))


if __name__ == "__main__":
    main()

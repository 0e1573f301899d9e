"""UI adapter protocol managed by the orchestrator."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class UIAdapter(Protocol):
    """
    Lifecycle shared by every UI (the Textual simulator, future web panels).

    The orchestrator will:
    1. Register UIs before initialization
    2. Call ``initialize()`` on each UI
    3. Call ``run()`` (blocks for interactive UIs)
    4. Call ``shutdown()`` on exit

    A UI that also defines ``register_with_controller(orchestrator)`` is
    handed the orchestrator once the controller exists, so it can subscribe
    to dialog and strip events before the dialog starts.
    """

    def initialize(self) -> None:
        ...

    def run(self) -> None:
        ...

    def shutdown(self) -> None:
        ...

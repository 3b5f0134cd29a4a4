"""Input gating.

Menus and dialogues suspend player input. Anything that can be suspended
implements :class:`InputEnabled`; :class:`ControlLock` disables a group of
such targets for the duration of a ``with`` block.
"""

from typing import List, Protocol


class InputEnabled(Protocol):
    @property
    def input_enabled(self) -> bool: ...

    def set_input_enabled(self, enabled: bool) -> None: ...


class ControlLock:
    """Disable input on every target while held, then restore prior flags.

    Example:
        with ControlLock(simulation, camera):
            run_upgrade_menu()
    """

    def __init__(self, *targets: InputEnabled) -> None:
        self.targets = targets
        self._previous: List[bool] = []
        self.held = False

    def acquire(self) -> None:
        if self.held:
            return
        self._previous = [target.input_enabled for target in self.targets]
        for target in self.targets:
            target.set_input_enabled(False)
        self.held = True

    def release(self) -> None:
        if not self.held:
            return
        for target, enabled in zip(self.targets, self._previous):
            target.set_input_enabled(enabled)
        self._previous = []
        self.held = False

    def __enter__(self) -> "ControlLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

"""Change notifications for game observers."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, List

Listener = Callable[["GameEvent"], None]


class GameEvent(Enum):
    DEALT = auto()
    SELECTED = auto()
    DESELECTED = auto()
    MOVED = auto()
    REJECTED = auto()
    AUTO_MOVED = auto()


class Observers:
    """Ordered listener registry, notified synchronously.

    Listeners must not subscribe or unsubscribe while a notification is being
    delivered.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._notifying = False

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._ensure_idle()
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self._ensure_idle()
            for index, registered in enumerate(self._listeners):
                if registered is listener:
                    del self._listeners[index]
                    return

        return unsubscribe

    def notify(self, event: GameEvent) -> None:
        self._notifying = True
        try:
            for listener in list(self._listeners):
                listener(event)
        finally:
            self._notifying = False

    def _ensure_idle(self) -> None:
        if self._notifying:
            raise RuntimeError("Listeners cannot change while a notification is delivered.")

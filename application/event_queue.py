"""Single-consumer event queue feeding the UI loop."""

import queue
from typing import Callable, List, Optional


class EventQueue:
    """Thread-safe FIFO; producers only `put`, the UI loop alone drains.

    `wakeup` is invoked after every put so a consumer sleeping in another
    event loop (prompt_toolkit's asyncio loop) can schedule a drain.
    """

    def __init__(self, wakeup: Optional[Callable[[], None]] = None):
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._wakeup = wakeup

    def set_wakeup(self, wakeup: Optional[Callable[[], None]]) -> None:
        self._wakeup = wakeup

    def put(self, event: object) -> None:
        self._queue.put(event)
        wakeup = self._wakeup
        if wakeup is not None:
            wakeup()

    def get_nowait(self) -> Optional[object]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> List[object]:
        """Pop every queued event in arrival order."""
        events: List[object] = []
        while True:
            event = self.get_nowait()
            if event is None:
                return events
            events.append(event)

    def empty(self) -> bool:
        return self._queue.empty()


__all__ = ["EventQueue"]

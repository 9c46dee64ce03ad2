"""Single-slot cancellable timers, one per input field."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

log = logging.getLogger(__name__)


class DebounceSlot:
    """
    Holds at most one pending call. Scheduling again cancels the pending
    call and restarts the delay.
    """

    def __init__(self, delay: float, name: str = "debounce"):
        self.delay = delay
        self.name = name
        self._timer: Optional[threading.Timer] = None
        self._callback: Optional[Callable[[], None]] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._callback = callback
            timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            timer.name = f"{self.name}_timer"
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._callback = None

    def flush(self) -> bool:
        """Run the pending call now, if any. Returns True when a call ran."""
        with self._lock:
            callback = self._callback
            self._cancel_timer()
            self._callback = None
        if callback is None:
            return False
        callback()
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer schedule(), cancel() or flush() superseded this timer.
            callback = self._callback
            if generation != self._generation or callback is None:
                return
            self._callback = None
            self._timer = None
        try:
            callback()
        except Exception:
            log.exception("Debounced call %s failed", self.name)


class FieldScheduler:
    """Independent debounce slots keyed by field name."""

    def __init__(self, delay: float):
        self.delay = delay
        self._slots: Dict[str, DebounceSlot] = {}

    def schedule(self, field: str, callback: Callable[[], None]) -> None:
        slot = self._slots.get(field)
        if slot is None:
            slot = DebounceSlot(self.delay, name=field)
            self._slots[field] = slot
        slot.schedule(callback)

    def pending(self, field: str) -> bool:
        slot = self._slots.get(field)
        return slot is not None and slot.pending

    def cancel(self, field: str) -> None:
        slot = self._slots.pop(field, None)
        if slot is not None:
            slot.cancel()

    def cancel_all(self) -> None:
        for slot in self._slots.values():
            slot.cancel()
        self._slots.clear()

    def flush_all(self) -> int:
        ran = 0
        for slot in list(self._slots.values()):
            if slot.flush():
                ran += 1
        return ran

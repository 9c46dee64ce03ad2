import threading

from debounce import DebounceSlot, FieldScheduler


def test_rescheduling_replaces_pending_call() -> None:
    calls: list[str] = []
    slot = DebounceSlot(60)
    slot.schedule(lambda: calls.append("first"))
    slot.schedule(lambda: calls.append("second"))
    assert slot.pending

    assert slot.flush() is True
    assert calls == ["second"]
    assert not slot.pending
    assert slot.flush() is False


def test_cancel_drops_pending_call() -> None:
    calls: list[int] = []
    slot = DebounceSlot(60)
    slot.schedule(lambda: calls.append(1))
    slot.cancel()
    assert not slot.pending
    assert slot.flush() is False
    assert calls == []


def test_timer_fires_after_delay() -> None:
    fired = threading.Event()
    slot = DebounceSlot(0.01, name="fast")
    slot.schedule(fired.set)
    assert fired.wait(timeout=2)
    assert not slot.pending


def test_failing_callback_does_not_break_the_slot() -> None:
    done = threading.Event()

    def boom() -> None:
        done.set()
        raise ValueError("boom")

    slot = DebounceSlot(0.01, name="broken")
    slot.schedule(boom)
    assert done.wait(timeout=2)
    slot.schedule(lambda: None)
    assert slot.flush() is True


def test_field_scheduler_keeps_fields_independent() -> None:
    calls: list[str] = []
    scheduler = FieldScheduler(60)
    scheduler.schedule("question", lambda: calls.append("question"))
    scheduler.schedule("answer:1", lambda: calls.append("answer"))
    assert scheduler.pending("question") and scheduler.pending("answer:1")

    scheduler.cancel("answer:1")
    assert not scheduler.pending("answer:1")
    assert scheduler.flush_all() == 1
    assert calls == ["question"]

    scheduler.schedule("question", lambda: calls.append("again"))
    scheduler.cancel_all()
    assert scheduler.flush_all() == 0

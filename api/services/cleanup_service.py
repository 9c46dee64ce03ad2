"""Service for cleanup operations."""
import logging
import threading
import time

from api.config import EDITOR_SWEEP_SECONDS
from api.services.editor_service import expire_idle_editors

logger = logging.getLogger(__name__)

_started = False
_started_lock = threading.Lock()


def cleanup_idle_editors() -> int:
    """Discard abandoned editors; failures are logged, never raised."""
    try:
        return expire_idle_editors()
    except Exception as e:
        logger.error(f"Failed to expire idle editors: {e}")
        return 0


def schedule_editor_cleanup() -> None:
    """Schedule periodic expiry of idle editors (once per process)."""
    global _started
    if EDITOR_SWEEP_SECONDS <= 0:
        return
    with _started_lock:
        if _started:
            return
        _started = True

    def _worker() -> None:
        while True:
            time.sleep(EDITOR_SWEEP_SECONDS)
            cleanup_idle_editors()

    thread = threading.Thread(
        target=_worker,
        name="editors_cleanup",
        daemon=True,
    )
    thread.start()

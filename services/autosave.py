"""
Debounced auto-save for documents that already exist in the store.

Each tracked change calls `schedule()`, which (re)arms a single-shot timer.
When the timer expires the scheduler asks its owner for a fresh
`PendingSave` built from the current form state and persists it. Failures
are retried a few times, then reported through `state` and `last_error`
without touching the in-memory form.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from loguru import logger
from tenacity import (
    Retrying,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import settings
from schemas.document import DocumentPayload
from services.errors import NotFoundError, ValidationError


@dataclass(frozen=True)
class PendingSave:
    """Everything one auto-save writes, captured when the timer expires."""
    document_id: str
    payload: DocumentPayload


class AutoSaveState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SAVING = "saving"
    SAVED = "saved"
    FAILED = "failed"


class AutoSaveScheduler:
    def __init__(
        self,
        build_pending: Callable[[], Optional[PendingSave]],
        persist: Callable[[PendingSave], None],
        delay: float | None = None,
        max_attempts: int | None = None,
        retry_wait=None,
    ):
        self.delay = settings.autosave_delay_seconds if delay is None else delay
        self.max_attempts = max_attempts or settings.autosave_max_attempts
        self._retry_wait = wait_exponential(multiplier=0.2, max=2) if retry_wait is None else retry_wait
        self._build_pending = build_pending
        self._persist = persist

        self._lock = threading.Lock()
        self._save_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._idle = threading.Event()
        self._idle.set()

        self.state = AutoSaveState.IDLE
        self.last_error: Optional[str] = None
        self.last_saved_at: Optional[datetime] = None
        self.save_count = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule(self) -> None:
        """Arm the timer, cancelling the one already running."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
            self.state = AutoSaveState.PENDING
            self._idle.clear()
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._drop_timer()
            if self.state == AutoSaveState.PENDING:
                self.state = AutoSaveState.IDLE
            self._idle.set()

    def flush(self) -> bool:
        """Run a pending save now. Returns False when nothing was pending."""
        with self._lock:
            if self._timer is None:
                return False
            self._drop_timer()
        self._run()
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no save is pending or running."""
        return self._idle.wait(timeout)

    def _drop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer schedule() or a flush() already took over
            if generation != self._generation:
                return
            self._timer = None
        self._run()

    def _run(self) -> None:
        with self._save_lock:
            try:
                pending = self._build_pending()
                if pending is None:
                    logger.debug("Auto-save skipped: nothing to save yet")
                    self.state = AutoSaveState.IDLE
                    return

                self.state = AutoSaveState.SAVING
                try:
                    self._persist_with_retry(pending)
                except Exception as e:
                    logger.error(f"Auto-save of document {pending.document_id} failed: {e}")
                    self.state = AutoSaveState.FAILED
                    self.last_error = str(e) or e.__class__.__name__
                else:
                    self.state = AutoSaveState.SAVED
                    self.last_error = None
                    self.last_saved_at = datetime.now(timezone.utc)
                    self.save_count += 1
                    logger.debug(f"Auto-saved document {pending.document_id}")
            finally:
                with self._lock:
                    if self._timer is None:
                        self._idle.set()

    def _persist_with_retry(self, pending: PendingSave) -> None:
        retryer = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._retry_wait,
            retry=retry_if_not_exception_type((ValidationError, NotFoundError)),
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                f"Retrying auto-save (attempt {retry_state.attempt_number})..."
            ),
        )
        retryer(self._persist, pending)

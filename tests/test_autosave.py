"""Tests for the debounced auto-save scheduler."""

import threading
import time

from sqlalchemy.exc import OperationalError
from tenacity import wait_none

from schemas.document import DocumentPayload
from services.autosave import AutoSaveScheduler, AutoSaveState, PendingSave
from services.errors import ValidationError

DELAY = 0.1


class Form:
    """Stand-in for an editor: a mutable client name and a write log."""

    def __init__(self, fail_times: int = 0, error: Exception | None = None):
        self.client_name = "Acme"
        self.writes: list[PendingSave] = []
        self.attempts = 0
        self.fail_times = fail_times
        self.error = error or OperationalError("UPDATE document", {}, Exception("database is locked"))
        self.lock = threading.Lock()

    def build_pending(self):
        if not self.client_name:
            return None
        return PendingSave("doc-1", DocumentPayload(client_name=self.client_name))

    def persist(self, pending: PendingSave) -> None:
        with self.lock:
            self.attempts += 1
            if self.attempts <= self.fail_times:
                raise self.error
            self.writes.append(pending)


def make_scheduler(form: Form, max_attempts: int = 3) -> AutoSaveScheduler:
    return AutoSaveScheduler(
        form.build_pending,
        form.persist,
        delay=DELAY,
        max_attempts=max_attempts,
        retry_wait=wait_none(),
    )


def test_burst_of_changes_writes_once_with_final_state():
    form = Form()
    scheduler = make_scheduler(form)

    for name in ("A", "Ac", "Acm", "Acme Corp"):
        form.client_name = name
        scheduler.schedule()
        time.sleep(DELAY / 4)

    assert scheduler.wait(timeout=2)
    assert len(form.writes) == 1
    assert form.writes[0].payload.client_name == "Acme Corp"
    assert scheduler.state == AutoSaveState.SAVED
    assert scheduler.save_count == 1
    assert scheduler.last_saved_at is not None


def test_nothing_written_before_delay():
    form = Form()
    scheduler = make_scheduler(form)

    scheduler.schedule()
    assert scheduler.pending
    assert scheduler.state == AutoSaveState.PENDING
    assert form.writes == []

    scheduler.wait(timeout=2)
    assert len(form.writes) == 1
    assert not scheduler.pending


def test_separate_pauses_write_separately():
    form = Form()
    scheduler = make_scheduler(form)

    scheduler.schedule()
    scheduler.wait(timeout=2)
    scheduler.schedule()
    scheduler.wait(timeout=2)

    assert len(form.writes) == 2
    assert scheduler.save_count == 2


def test_cancel_discards_pending_save():
    form = Form()
    scheduler = make_scheduler(form)

    scheduler.schedule()
    scheduler.cancel()
    time.sleep(DELAY * 3)

    assert form.writes == []
    assert scheduler.state == AutoSaveState.IDLE
    assert not scheduler.pending


def test_flush_runs_pending_save_immediately():
    form = Form()
    scheduler = make_scheduler(form)
    scheduler.delay = 5

    scheduler.schedule()
    assert scheduler.flush() is True
    assert len(form.writes) == 1
    assert scheduler.state == AutoSaveState.SAVED

    assert scheduler.flush() is False
    time.sleep(DELAY)
    assert len(form.writes) == 1


def test_skipped_when_nothing_to_save():
    form = Form()
    form.client_name = ""
    scheduler = make_scheduler(form)

    scheduler.schedule()
    scheduler.wait(timeout=2)

    assert form.attempts == 0
    assert scheduler.state == AutoSaveState.IDLE
    assert scheduler.last_error is None


def test_transient_failure_is_retried():
    form = Form(fail_times=2)
    scheduler = make_scheduler(form)

    scheduler.schedule()
    scheduler.wait(timeout=2)

    assert form.attempts == 3
    assert len(form.writes) == 1
    assert scheduler.state == AutoSaveState.SAVED
    assert scheduler.last_error is None


def test_persistent_failure_is_reported():
    form = Form(fail_times=10)
    scheduler = make_scheduler(form, max_attempts=3)

    scheduler.schedule()
    scheduler.wait(timeout=2)

    assert form.attempts == 3
    assert form.writes == []
    assert scheduler.state == AutoSaveState.FAILED
    assert "database is locked" in scheduler.last_error


def test_validation_failure_is_not_retried():
    form = Form(fail_times=10, error=ValidationError("Client name is required"))
    scheduler = make_scheduler(form)

    scheduler.schedule()
    scheduler.wait(timeout=2)

    assert form.attempts == 1
    assert scheduler.state == AutoSaveState.FAILED
    assert scheduler.last_error == "Client name is required"


def test_recovers_after_failure():
    form = Form(fail_times=3)
    scheduler = make_scheduler(form)

    scheduler.schedule()
    scheduler.wait(timeout=2)
    assert scheduler.state == AutoSaveState.FAILED

    scheduler.schedule()
    scheduler.wait(timeout=2)
    assert scheduler.state == AutoSaveState.SAVED
    assert scheduler.last_error is None
    assert len(form.writes) == 1

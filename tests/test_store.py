"""Tests for the settings repository and typed session store."""

import json

from workday_zen.features.timer.domain import DEFAULT_DURATION_MS, TimerState, TimerStatus
from workday_zen.features.timer.store import (
    AUTO_START_KEY,
    FOCUS_TASK_KEY,
    TIMER_STATE_KEY,
    TOTAL_DURATION_KEY,
)

from tests.conftest import HOUR_MS, START_MS


# ---- SettingsRepository ----

class TestSettingsRepository:
    def test_missing_key_is_none(self, repository):
        assert repository.get("nope") is None

    def test_set_then_overwrite(self, repository):
        repository.set("focus_task", "write report")
        repository.set("focus_task", "review PRs")
        assert repository.get("focus_task") == "review PRs"
        assert repository.all() == {"focus_task": "review PRs"}

    def test_delete(self, repository):
        repository.set("auto_start", "true")
        assert repository.delete("auto_start") is True
        assert repository.delete("auto_start") is False
        assert repository.get("auto_start") is None

    def test_survives_new_session_factory_on_same_file(self, tmp_path):
        from workday_zen.db.session import create_session_factory
        from workday_zen.features.timer.repository import SettingsRepository

        url = f"sqlite:///{tmp_path / 'nested' / 'zen.db'}"
        SettingsRepository(create_session_factory(url)).set("last_active_day", "2024-01-01")

        reopened = SettingsRepository(create_session_factory(url))
        assert reopened.get("last_active_day") == "2024-01-01"


# ---- timer_state ----

class TestTimerStatePersistence:
    def test_missing_is_idle(self, store):
        assert store.load_timer_state(START_MS) == TimerState()

    def test_written_as_camel_case_json(self, store, repository):
        store.save_timer_state(TimerState(start_time=1, end_time=2, status=TimerStatus.RUNNING))
        assert json.loads(repository.get(TIMER_STATE_KEY)) == {
            "startTime": 1,
            "endTime": 2,
            "status": "RUNNING",
        }

    def test_running_session_restored_unchanged(self, store):
        state = TimerState(start_time=START_MS, end_time=START_MS + HOUR_MS, status=TimerStatus.RUNNING)
        store.save_timer_state(state)
        assert store.load_timer_state(START_MS + 1000) == state

    def test_unparseable_reinitializes_to_idle(self, store, repository):
        repository.set(TIMER_STATE_KEY, "{not json")
        assert store.load_timer_state(START_MS) == TimerState()

    def test_unknown_status_reinitializes_to_idle(self, store, repository):
        repository.set(TIMER_STATE_KEY, '{"startTime": null, "endTime": null, "status": "PAUSED"}')
        assert store.load_timer_state(START_MS) == TimerState()

    def test_expired_running_session_becomes_finished(self, store):
        store.save_timer_state(
            TimerState(start_time=START_MS, end_time=START_MS + HOUR_MS, status=TimerStatus.RUNNING)
        )
        loaded = store.load_timer_state(START_MS + 2 * HOUR_MS)
        assert loaded == TimerState(status=TimerStatus.FINISHED)

    def test_running_without_times_is_idle(self, store, repository):
        repository.set(TIMER_STATE_KEY, '{"startTime": null, "endTime": null, "status": "RUNNING"}')
        assert store.load_timer_state(START_MS) == TimerState()

    def test_running_with_end_before_start_is_idle(self, store):
        store.save_timer_state(
            TimerState(start_time=START_MS + 2 * HOUR_MS, end_time=START_MS + HOUR_MS, status=TimerStatus.RUNNING)
        )
        assert store.load_timer_state(START_MS) == TimerState()

    def test_listening_with_stray_times_is_cleaned(self, store):
        store.save_timer_state(
            TimerState(start_time=START_MS, end_time=START_MS + HOUR_MS, status=TimerStatus.LISTENING)
        )
        assert store.load_timer_state(START_MS) == TimerState(status=TimerStatus.LISTENING)


# ---- scalar keys ----

class TestScalarKeys:
    def test_defaults(self, store):
        assert store.load_total_duration_ms() == DEFAULT_DURATION_MS == 28_800_000
        assert store.load_auto_start() is True
        assert store.load_focus_task() == ""
        assert store.load_last_active_day() is None

    def test_duration_round_trip_as_decimal_string(self, store, repository):
        store.save_total_duration_ms(5_400_000)
        assert repository.get(TOTAL_DURATION_KEY) == "5400000"
        assert store.load_total_duration_ms() == 5_400_000

    def test_corrupt_or_non_positive_duration_uses_default(self, store, repository):
        repository.set(TOTAL_DURATION_KEY, "eight hours")
        assert store.load_total_duration_ms() == DEFAULT_DURATION_MS
        repository.set(TOTAL_DURATION_KEY, "0")
        assert store.load_total_duration_ms() == DEFAULT_DURATION_MS

    def test_auto_start_encoding(self, store, repository):
        store.save_auto_start(False)
        assert repository.get(AUTO_START_KEY) == "false"
        assert store.load_auto_start() is False
        repository.set(AUTO_START_KEY, "yes")
        assert store.load_auto_start() is False

    def test_focus_task(self, store, repository):
        store.save_focus_task("Ship the quarterly report")
        assert repository.get(FOCUS_TASK_KEY) == "Ship the quarterly report"
        assert store.load_focus_task() == "Ship the quarterly report"

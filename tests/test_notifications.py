"""Tests for session start/finish alerts and the completion chime."""

from types import SimpleNamespace

import pytest

from workday_zen.features.timer.domain import TimerState, TimerStatus
from workday_zen.services.notifications import (
    CompletionChime,
    DesktopNotificationCapability,
    NotificationDispatcher,
    PermissionState,
)
from workday_zen.services.notifications.notification_dispatcher import (
    SESSION_FINISHED_TITLE,
    SESSION_STARTED_TITLE,
)

from tests.conftest import HOUR_MS, FakeNotifications, FakeSound


def finish_session(machine, clock):
    machine.listen()
    machine.start()
    clock.advance(machine.config.total_duration_ms)
    machine.tick()


class TestNotificationDispatcher:
    def test_one_alert_per_edge(self, make_machine, notifications, clock):
        machine = make_machine(total_duration_ms=HOUR_MS)
        NotificationDispatcher(machine, notifications)
        machine.restore()

        finish_session(machine, clock)
        machine.tick()

        titles = [n["title"] for n in notifications.shown]
        assert titles == [SESSION_STARTED_TITLE, SESSION_FINISHED_TITLE]
        assert notifications.shown[1]["options"]["require_interaction"] is True

    @pytest.mark.parametrize("permission", [PermissionState.DENIED, PermissionState.PROMPT])
    def test_no_alerts_without_permission(self, make_machine, clock, permission):
        capability = FakeNotifications(permission=permission)
        machine = make_machine(total_duration_ms=HOUR_MS)
        dispatcher = NotificationDispatcher(machine, capability)
        machine.restore()

        finish_session(machine, clock)

        assert capability.shown == []
        assert dispatcher.enabled is False
        assert machine.status == TimerStatus.FINISHED

    def test_restored_running_session_does_not_announce_start(self, make_machine, store, notifications, clock):
        store.save_timer_state(TimerState(
            start_time=clock.now_ms(), end_time=clock.now_ms() + HOUR_MS, status=TimerStatus.RUNNING
        ))
        machine = make_machine()
        NotificationDispatcher(machine, notifications)
        machine.restore()
        assert notifications.shown == []

    def test_show_failure_is_swallowed(self, make_machine, clock):
        class BrokenNotifications(FakeNotifications):
            def show(self, title, body, options=None):
                raise OSError("no notification daemon")

        machine = make_machine()
        NotificationDispatcher(machine, BrokenNotifications())
        machine.restore()
        machine.listen()
        assert machine.start() is True
        assert machine.status == TimerStatus.RUNNING

    @pytest.mark.asyncio
    async def test_request_permission_is_idempotent(self, make_machine):
        capability = FakeNotifications(permission=PermissionState.PROMPT)
        dispatcher = NotificationDispatcher(make_machine(), capability)

        assert await dispatcher.request_permission() == PermissionState.GRANTED
        assert await dispatcher.request_permission() == PermissionState.GRANTED
        assert capability.requests == 1
        assert dispatcher.enabled


class TestDesktopNotificationCapability:
    @pytest.mark.asyncio
    async def test_new_decision_is_reported(self):
        decisions = []
        capability = DesktopNotificationCapability(allowed=True, on_decision=decisions.append)

        await capability.request_permission()
        await capability.request_permission()

        assert decisions == [PermissionState.GRANTED]

    @pytest.mark.asyncio
    async def test_earlier_decision_is_kept(self):
        decisions = []
        capability = DesktopNotificationCapability(
            allowed=False, permission=PermissionState.GRANTED, on_decision=decisions.append
        )

        assert capability.query_permission() == PermissionState.GRANTED
        assert await capability.request_permission() == PermissionState.GRANTED
        assert decisions == []

    @pytest.mark.asyncio
    async def test_permission_decided_once(self):
        capability = DesktopNotificationCapability(allowed=False)
        assert capability.query_permission() == PermissionState.PROMPT
        assert await capability.request_permission() == PermissionState.DENIED
        assert capability.query_permission() == PermissionState.DENIED

    def test_show_uses_plyer(self, monkeypatch):
        from workday_zen.services.notifications import capability as capability_module

        calls = []
        monkeypatch.setattr(
            capability_module, "plyer_notification", SimpleNamespace(notify=lambda **kwargs: calls.append(kwargs))
        )

        DesktopNotificationCapability().show("WorkDay Complete!", "Time to log off", {"require_interaction": True})

        assert calls[0]["title"] == "WorkDay Complete!"
        assert calls[0]["message"] == "Time to log off"
        assert calls[0]["timeout"] == 60


class TestCompletionChime:
    def test_plays_on_finish(self, make_machine, clock):
        sound = FakeSound()
        machine = make_machine(total_duration_ms=HOUR_MS)
        CompletionChime(machine, sound)
        machine.restore()
        finish_session(machine, clock)
        assert sound.plays == 1

    def test_muted(self, make_machine, clock):
        sound = FakeSound()
        machine = make_machine(total_duration_ms=HOUR_MS)
        chime = CompletionChime(machine, sound)
        chime.muted = True
        machine.restore()
        finish_session(machine, clock)
        assert sound.plays == 0

    def test_not_played_for_restored_finished_state(self, make_machine, store):
        store.save_timer_state(TimerState(status=TimerStatus.FINISHED))
        sound = FakeSound()
        machine = make_machine()
        CompletionChime(machine, sound)
        machine.restore()
        assert sound.plays == 0

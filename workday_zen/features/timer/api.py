"""Timer API endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from workday_zen.features.timer.schemas import (
    ActivityRequest,
    AutoStartRequest,
    FocusTaskRequest,
    MuteRequest,
    PermissionResponse,
    TimerSnapshot,
    UpdateDurationRequest,
    VisibilityRequest,
    VisibilityResponse,
)
from workday_zen.runtime import SessionRuntime

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/timer", tags=["timer"])


def get_runtime(request: Request) -> SessionRuntime:
    """Dependency returning the runtime created at application startup"""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Session runtime is not running")
    return runtime


@router.get("/", response_model=TimerSnapshot)
async def get_timer(runtime: SessionRuntime = Depends(get_runtime)):
    """Current state, remaining time, window title/badge and tip."""
    return runtime.snapshot()


@router.post("/listen", response_model=TimerSnapshot)
async def listen(runtime: SessionRuntime = Depends(get_runtime)):
    """Start waiting for activity (Idle -> Listening). Ignored in other states."""
    runtime.machine.listen()
    return runtime.snapshot()


@router.post("/cancel", response_model=TimerSnapshot)
async def cancel(runtime: SessionRuntime = Depends(get_runtime)):
    """Stop waiting for activity (Listening -> Idle)."""
    runtime.machine.cancel()
    return runtime.snapshot()


@router.post("/reset", response_model=TimerSnapshot)
async def reset(runtime: SessionRuntime = Depends(get_runtime)):
    """Abandon the session from any state."""
    runtime.machine.reset()
    return runtime.snapshot()


@router.put("/config", response_model=TimerSnapshot)
async def update_config(
    request: UpdateDurationRequest,
    runtime: SessionRuntime = Depends(get_runtime)
):
    """
    Change the session length.

    A running session keeps its start time and gets a new end time.

    Raises:
        422: Duration is not positive
    """
    duration_ms = request.to_duration_ms()
    if not runtime.machine.reconfigure(duration_ms):
        raise HTTPException(status_code=422, detail="Session duration must be greater than zero")
    return runtime.snapshot()


@router.put("/auto-start", response_model=TimerSnapshot)
async def update_auto_start(
    request: AutoStartRequest,
    runtime: SessionRuntime = Depends(get_runtime)
):
    runtime.machine.set_auto_start(request.enabled)
    return runtime.snapshot()


@router.put("/focus-task", response_model=TimerSnapshot)
async def update_focus_task(
    request: FocusTaskRequest,
    runtime: SessionRuntime = Depends(get_runtime)
):
    runtime.set_focus_task(request.focus_task)
    return runtime.snapshot()


@router.put("/mute", response_model=TimerSnapshot)
async def update_mute(
    request: MuteRequest,
    runtime: SessionRuntime = Depends(get_runtime)
):
    runtime.chime.muted = request.muted
    return runtime.snapshot()


@router.post("/notifications/permission", response_model=PermissionResponse)
async def request_notification_permission(runtime: SessionRuntime = Depends(get_runtime)):
    """Ask the platform for notification permission (idempotent)."""
    permission = await runtime.notifications.request_permission()
    return PermissionResponse(
        permission=permission,
        notifications_enabled=runtime.notifications.enabled,
    )


@router.post("/visibility", response_model=VisibilityResponse)
async def report_visibility(
    request: VisibilityRequest,
    runtime: SessionRuntime = Depends(get_runtime)
):
    """Host window visibility changed; re-acquires a wanted wake lock."""
    reacquired = await runtime.wake_lock.on_visibility_change(request.visible)
    return VisibilityResponse(reacquired=reacquired, wake_lock_active=runtime.wake_lock.active)


@router.post("/activity", response_model=TimerSnapshot)
async def report_activity(
    request: ActivityRequest,
    runtime: SessionRuntime = Depends(get_runtime)
):
    """Deliver an input event observed by the host window."""
    delivered = runtime.input_source.emit(request.kind)
    logger.debug(f"Activity {request.kind.value} delivered to {delivered} subscriber(s)")
    return runtime.snapshot()

"""Timer state machine - the authoritative session state and transition rules"""
import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Optional

from workday_zen.config import TICK_INTERVAL_SECONDS
from workday_zen.features.timer.domain import SessionConfig, TimerState, TimerStatus, Transition
from workday_zen.features.timer.store import SessionStore
from workday_zen.services.scheduler import ScheduledHandle, Scheduler
from workday_zen.utils.clock import Clock

logger = logging.getLogger(__name__)

TransitionHook = Callable[[Transition], None]
ConfigHook = Callable[[SessionConfig], None]


class TimerStateMachine:
    """
    Owns the in-memory TimerState and writes it through to the store on every change.

    Transitions:
        Idle      --listen / auto-start-->  Listening
        Listening --start (activity)----->  Running
        Listening --cancel--------------->  Idle
        Running   --tick past endTime---->  Finished
        any       --reset---------------->  Idle

    Side effects attach through on_enter/on_exit hooks keyed by status. Within one
    transition the order is: cancel the running tick, mutate, persist, exit hooks,
    enter hooks. Exit hooks run exactly once per exit regardless of the edge taken.
    """

    def __init__(
        self,
        store: SessionStore,
        scheduler: Scheduler,
        clock: Optional[Clock] = None,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
    ):
        self._store = store
        self._scheduler = scheduler
        self._clock = clock or Clock()
        self._tick_interval = tick_interval_seconds

        self._config = SessionConfig(total_duration_ms=store.load_total_duration_ms())
        self._auto_start = store.load_auto_start()
        self._state = TimerState()
        self._tick_handle: Optional[ScheduledHandle] = None

        self._enter_hooks: DefaultDict[TimerStatus, List[TransitionHook]] = defaultdict(list)
        self._exit_hooks: DefaultDict[TimerStatus, List[TransitionHook]] = defaultdict(list)
        self._reset_hooks: List[Callable[[], None]] = []
        self._config_hooks: List[ConfigHook] = []

        self.on_enter(TimerStatus.RUNNING, self._start_ticking)

    # ---- Read-only properties ----

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def status(self) -> TimerStatus:
        return self._state.status

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def auto_start(self) -> bool:
        return self._auto_start

    @property
    def is_ticking(self) -> bool:
        return self._tick_handle is not None

    def remaining_ms(self) -> int:
        """Derived, never stored: max(0, endTime - now)"""
        return self._state.remaining_ms(self._clock.now_ms())

    def progress_fraction(self) -> float:
        if self._state.end_time is None:
            return 0.0
        fraction = 1 - self.remaining_ms() / self._config.total_duration_ms
        return max(0.0, min(1.0, fraction))

    # ---- Hook registration ----

    def on_enter(self, status: TimerStatus, hook: TransitionHook) -> None:
        self._enter_hooks[status].append(hook)

    def on_exit(self, status: TimerStatus, hook: TransitionHook) -> None:
        self._exit_hooks[status].append(hook)

    def on_reset(self, hook: Callable[[], None]) -> None:
        self._reset_hooks.append(hook)

    def on_config_change(self, hook: ConfigHook) -> None:
        self._config_hooks.append(hook)

    # ---- Lifecycle ----

    def restore(self) -> TimerState:
        """
        Load the persisted state and re-enter it.

        Enter hooks see previous=None, so a restored Running session resumes
        ticking and wants its wake lock back without a second start notification.
        """
        state = self._store.load_timer_state(self._clock.now_ms())
        self._state = state
        self._store.save_timer_state(state)
        logger.info(f"Restored timer state: {state.status.value}")

        transition = Transition(previous=None, current=state.status, state=state)
        for hook in list(self._enter_hooks[state.status]):
            hook(transition)

        self._apply_auto_start()
        return self._state

    def stop(self) -> None:
        """Cancel the running tick without changing state (process shutdown)"""
        self._cancel_tick()

    # ---- Commands ----

    def listen(self) -> bool:
        """User start command: Idle -> Listening"""
        if self._state.status != TimerStatus.IDLE:
            logger.debug(f"listen() ignored in {self._state.status.value}")
            return False
        self._transition(TimerState(status=TimerStatus.LISTENING))
        return True

    def cancel(self) -> bool:
        """User cancel: Listening -> Idle"""
        if self._state.status != TimerStatus.LISTENING:
            logger.debug(f"cancel() ignored in {self._state.status.value}")
            return False
        self.reset()
        return True

    def start(self) -> bool:
        """
        Listening -> Running. A no-op anywhere else, which absorbs duplicate
        activity events delivered after the first.
        """
        if self._state.status != TimerStatus.LISTENING:
            logger.debug(f"start() ignored in {self._state.status.value}")
            return False

        now = self._clock.now_ms()
        self._transition(TimerState(
            start_time=now,
            end_time=now + self._config.total_duration_ms,
            status=TimerStatus.RUNNING,
        ))
        return True

    def reset(self) -> TimerState:
        """
        Return to {null, null, Idle} from any state. Idempotent.

        Reset hooks run after the Idle shape is persisted; auto-start applies last.
        """
        self._transition(TimerState())
        for hook in list(self._reset_hooks):
            hook()
        self._apply_auto_start()
        return self._state

    def tick(self) -> None:
        """Periodic recomputation while Running; finishes the session exactly once."""
        if self._state.status != TimerStatus.RUNNING:
            self._cancel_tick()
            return

        if self.remaining_ms() <= 0:
            self._transition(self._state.model_copy(update={"status": TimerStatus.FINISHED}))

    def reconfigure(self, new_duration_ms: int) -> bool:
        """
        Change the session length.

        While Running, endTime is recomputed from the unchanged startTime.
        Non-positive durations are rejected without touching state.

        Args:
            new_duration_ms: New total duration in milliseconds

        Returns:
            True if applied, False if rejected
        """
        if isinstance(new_duration_ms, bool) or not isinstance(new_duration_ms, int) or new_duration_ms <= 0:
            logger.warning(f"Rejected session duration {new_duration_ms!r}: must be a positive integer")
            return False

        self._config = SessionConfig(total_duration_ms=new_duration_ms)
        self._store.save_total_duration_ms(new_duration_ms)
        logger.info(f"Session duration set to {new_duration_ms}ms")

        if self._state.status == TimerStatus.RUNNING and self._state.start_time is not None:
            self._transition(self._state.model_copy(
                update={"end_time": self._state.start_time + new_duration_ms}
            ))
            # A shortened session may already be over
            self.tick()

        for hook in list(self._config_hooks):
            hook(self._config)
        return True

    def set_auto_start(self, enabled: bool) -> None:
        self._auto_start = enabled
        self._store.save_auto_start(enabled)
        logger.info(f"Auto-start {'enabled' if enabled else 'disabled'}")
        self._apply_auto_start()

    # ---- Internals ----

    def _transition(self, new_state: TimerState) -> None:
        previous = self._state
        leaving = previous.status != new_state.status

        if leaving and previous.status == TimerStatus.RUNNING:
            self._cancel_tick()

        self._state = new_state
        self._store.save_timer_state(new_state)

        if not leaving:
            return

        logger.info(f"Timer transition: {previous.status.value} -> {new_state.status.value}")
        transition = Transition(previous=previous.status, current=new_state.status, state=new_state)
        for hook in list(self._exit_hooks[previous.status]):
            hook(transition)
        for hook in list(self._enter_hooks[new_state.status]):
            hook(transition)

    def _apply_auto_start(self) -> None:
        if self._auto_start and self._state.status == TimerStatus.IDLE:
            self._transition(TimerState(status=TimerStatus.LISTENING))

    def _start_ticking(self, transition: Transition) -> None:
        self._cancel_tick()
        self._tick_handle = self._scheduler.call_every(self._tick_interval, self.tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

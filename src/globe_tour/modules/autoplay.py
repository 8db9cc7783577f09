"""Autoplay scheduler with interaction-aware pause and resume.

State machine::

    STOPPED --start()--> RUNNING --pause()--> PAUSED_PENDING_RESUME
       ^                   |  ^                    |
       |                   |  +---- resume timer --+
       +------ stop() -----+-----------------------+

At most one tick timer and one resume timer exist at any moment; both
live in a ``TimerRegistry`` so teardown invalidates them wholesale.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from globe_tour.core.timers import TimerRegistry
from globe_tour.schemas import AutoplayConfig

if TYPE_CHECKING:
    from globe_tour.core.interfaces import Scheduler

logger = logging.getLogger(__name__)


class AutoplayState(str, Enum):
    """Autoplay scheduler states."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED_PENDING_RESUME = "paused_pending_resume"


class AutoplayScheduler:
    """Owns the recurring advance timer.

    Args:
        scheduler: Clock and timer source.
        config: Autoplay settings.
        advance: Called once per tick (normally ``NavigationState.next``).
        on_state_change: Optional observer of state transitions.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: AutoplayConfig,
        advance: Callable[[], object],
        on_state_change: Callable[[AutoplayState], None] | None = None,
    ) -> None:
        self._timers = TimerRegistry(scheduler, owner="autoplay")
        self._config = config
        self._advance = advance
        self._on_state_change = on_state_change
        self._state = AutoplayState.STOPPED
        self._interval_ms = config.interval_ms
        self._tick_timer: int | None = None
        self._resume_timer: int | None = None
        self._hidden = False
        self._active_when_hidden = False
        self._tick_count = 0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> AutoplayState:
        return self._state

    @property
    def config(self) -> AutoplayConfig:
        return self._config

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def tick_count(self) -> int:
        """How many advances autoplay has triggered."""
        return self._tick_count

    @property
    def pending_timers(self) -> int:
        return self._timers.active_count

    @property
    def hidden(self) -> bool:
        return self._hidden

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, interval_ms: int | None = None) -> None:
        """Enter RUNNING. Idempotent while already running."""
        if not self._config.enabled:
            logger.debug("Autoplay disabled; start ignored")
            return
        if self._state is AutoplayState.RUNNING:
            return
        if self._hidden:
            # Deferred until the host becomes visible again
            self._active_when_hidden = True
            return
        if interval_ms is not None:
            if interval_ms <= 0:
                raise ValueError(f"interval_ms must be positive, got {interval_ms}")
            self._interval_ms = interval_ms
        self._cancel_resume()
        self._arm_tick()
        self._set_state(AutoplayState.RUNNING)

    def stop(self) -> None:
        """Enter STOPPED, cancelling every pending timer."""
        self._cancel_tick()
        self._cancel_resume()
        self._set_state(AutoplayState.STOPPED)

    def pause(self) -> None:
        """Halt advancing after a user interaction.

        Only acts while RUNNING and when ``pause_on_interaction`` is set.
        With a resume delay the scheduler waits in PAUSED_PENDING_RESUME;
        without one it stays STOPPED until restarted.
        """
        if self._state is not AutoplayState.RUNNING:
            return
        if not self._config.pause_on_interaction:
            return
        self._cancel_tick()
        delay = self._config.resume_delay_ms
        if delay:
            self._resume_timer = self._timers.schedule(delay, self._resume, tag="resume")
            self._set_state(AutoplayState.PAUSED_PENDING_RESUME)
            logger.debug("Autoplay paused; resuming in %d ms", delay)
        else:
            self._set_state(AutoplayState.STOPPED)
            logger.debug("Autoplay paused with no resume delay")

    def notify_interaction(self) -> None:
        """Route a pointer, touch or keyboard interaction."""
        if self._state is AutoplayState.RUNNING:
            self.pause()

    def set_visible(self, visible: bool) -> None:
        """React to the host page being hidden or shown."""
        if not visible:
            if self._hidden:
                return
            self._hidden = True
            self._active_when_hidden = self._state is not AutoplayState.STOPPED
            self.stop()
            return

        if not self._hidden:
            return
        self._hidden = False
        was_active = self._active_when_hidden
        self._active_when_hidden = False
        if was_active and self._config.enabled:
            self.start()

    def reconfigure(self, config: AutoplayConfig) -> None:
        """Swap the configuration.

        A running scheduler gets exactly one fresh tick timer at the new
        interval. A pending resume is left in place. Disabling autoplay
        stops it.
        """
        self._config = config
        self._interval_ms = config.interval_ms
        if not config.enabled:
            self.stop()
            return
        if self._state is AutoplayState.RUNNING:
            self._cancel_tick()
            self._arm_tick()

    def dispose(self) -> None:
        """Stop and invalidate every timer ever scheduled by this instance."""
        self.stop()
        self._timers.cancel_all()

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        self._tick_timer = None
        self._arm_tick()
        self._tick_count += 1
        self._advance()

    def _resume(self) -> None:
        self._resume_timer = None
        if self._state is not AutoplayState.PAUSED_PENDING_RESUME:
            return
        logger.debug("Autoplay resuming after interaction pause")
        # The resume itself counts as the next advance
        self._arm_tick()
        self._set_state(AutoplayState.RUNNING)
        self._tick_count += 1
        self._advance()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _arm_tick(self) -> None:
        self._cancel_tick()
        self._tick_timer = self._timers.schedule(self._interval_ms, self._tick, tag="tick")

    def _cancel_tick(self) -> None:
        self._timers.cancel(self._tick_timer)
        self._tick_timer = None

    def _cancel_resume(self) -> None:
        self._timers.cancel(self._resume_timer)
        self._resume_timer = None

    def _set_state(self, state: AutoplayState) -> None:
        if state is self._state:
            return
        previous, self._state = self._state, state
        logger.debug("Autoplay %s -> %s", previous.value, state.value)
        if self._on_state_change is not None:
            self._on_state_change(state)

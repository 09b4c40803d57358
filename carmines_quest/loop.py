"""Game loop: drives a session from timers and player input.

:class:`GameLoop` owns the current :class:`State` and three timers on a
:class:`carmines_quest.scheduler.Scheduler`:

* a repeating countdown timer (``countdown_interval_ms``),
* a repeating pursuit timer (``pursuit_interval_ms``),
* a one-shot expiry timer for the displayed hint.

Timers exist only while the session is ``PLAYING``. Every state change passes
through :meth:`GameLoop._set_state`, which cancels all timers when the session
leaves ``PLAYING`` (pause, completion, failure) and starts fresh ones when it
re-enters it. When a paused session still shows a hint, the time the hint was
displayed so far is written back to the session so that it resumes with the
correct remaining time.

Reaching the delivery target invokes ``on_complete(level, time_left,
hints_used)`` once per completed session.
"""

import logging
import random
from typing import Callable, Dict, Optional, Union

from carmines_quest.actions import Action, KEY_BINDINGS
from carmines_quest.components import Hint
from carmines_quest.config import DEFAULT_CONFIG, GameConfig
from carmines_quest.levels.catalog import build_level
from carmines_quest.levels.config import LevelConfig
from carmines_quest.levels.convert import to_state
from carmines_quest.scheduler import Scheduler, Timer
from carmines_quest.state import State
from carmines_quest.step import countdown_tick, hint_tick, pursuit_tick, step
from carmines_quest.step import reset as reset_state
from carmines_quest.types import Difficulty, Path, SessionStatus

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[int, int, int], None]

COUNTDOWN = "countdown"
PURSUIT = "pursuit"
HINT = "hint"


class GameLoop:
    """Timer-driven owner of one delivery session.

    Arguments:
        level: Level number to load, or a custom level configuration.
        difficulty: Difficulty used for the time budget.
        config: Tunables (tick intervals, hint duration, ...).
        on_complete: Called with ``(level, time_left, hints_used)`` when the
            delivery is completed.
        seed: Seed for pursuer placement; ``None`` for random placement.
        scheduler: Scheduler to register timers on; a new one by default.
    """

    def __init__(
        self,
        level: Union[int, LevelConfig] = 1,
        difficulty: Difficulty = Difficulty.MEDIUM,
        config: GameConfig = DEFAULT_CONFIG,
        on_complete: Optional[CompletionCallback] = None,
        seed: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self._difficulty = difficulty
        self._config = config
        self._on_complete = on_complete
        self._rng = random.Random(seed)
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._timers: Dict[str, Timer] = {}
        self._hint_shown_at_ms = 0
        self._closed = False
        self._state: Optional[State] = None
        self.load_level(level)

    # --- Queries ---

    @property
    def state(self) -> State:
        assert self._state is not None
        return self._state

    @property
    def level(self) -> LevelConfig:
        return self.state.level

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def status(self) -> SessionStatus:
        return self.state.status

    @property
    def hint_active(self) -> bool:
        return self._current_hint() is not None

    @property
    def hint_path(self) -> Path:
        hint = self._current_hint()
        return list(hint.path) if hint is not None else []

    @property
    def hint_remaining_ms(self) -> int:
        """Display time left for the current hint, 0 when none is shown."""
        timer = self._timers.get(HINT)
        if timer is not None and timer.active:
            return self._scheduler.remaining_ms(timer)
        hint = self._current_hint()
        return hint.remaining_ms if hint is not None else 0

    def is_timer_running(self, name: str) -> bool:
        timer = self._timers.get(name)
        return timer is not None and timer.active

    # --- Commands ---

    def load_level(self, level: Union[int, LevelConfig]) -> None:
        """Replace the session with a fresh one for ``level``.

        An ``int`` selects an authored level at the loop's difficulty; a
        :class:`LevelConfig` is played as given.
        """
        if isinstance(level, int):
            level = build_level(level, self._difficulty, self._config)
        logger.info("Loading level %d (%ds)", level.number, level.time_limit)
        self._cancel_timers()
        self._state = None
        self._set_state(to_state(level, seed=self._next_seed(), config=self._config))

    def reset(self) -> None:
        """Restart the current level (used after completion or failure)."""
        logger.info("Resetting level %d", self.level.number)
        state = reset_state(self.state, seed=self._next_seed(), config=self._config)
        self._cancel_timers()
        self._state = None
        self._set_state(state)

    def handle_action(self, action: Action) -> None:
        self._set_state(step(self.state, action, config=self._config))

    def handle_key(self, key: str) -> None:
        """Dispatch a keyboard key; unbound keys are ignored."""
        action = KEY_BINDINGS.get(key)
        if action is not None:
            self.handle_action(action)

    def toggle_pause(self) -> None:
        self.handle_action(Action.PAUSE)

    def advance(self, ms: int) -> None:
        """Let ``ms`` milliseconds of game time pass."""
        self._scheduler.advance(ms)

    def close(self) -> None:
        """Tear the session down; no timer fires afterwards."""
        self._closed = True
        self._cancel_timers()

    # --- Timer callbacks ---

    def _on_countdown(self) -> None:
        self._set_state(countdown_tick(self.state))

    def _on_pursuit(self) -> None:
        self._set_state(pursuit_tick(self.state))

    def _on_hint_expired(self) -> None:
        elapsed = self._scheduler.now_ms - self._hint_shown_at_ms
        self._timers.pop(HINT, None)
        self._set_state(hint_tick(self.state, elapsed))

    # --- Internal ---

    def _set_state(self, new: State) -> None:
        old = self._state
        if new is old:
            return
        old_status = old.status if old is not None else None

        leaving_play = old_status is SessionStatus.PLAYING
        if leaving_play and new.status is not SessionStatus.PLAYING:
            new = self._suspend(new)

        self._state = new
        if old_status is not new.status:
            logger.info(
                "Level %d: %s -> %s", new.level.number, old_status, new.status
            )
        self._sync_timers()

        if (
            new.status is SessionStatus.COMPLETED
            and old_status is not SessionStatus.COMPLETED
            and self._on_complete is not None
        ):
            self._on_complete(new.level.number, new.time_left, new.hints_used)

    def _suspend(self, state: State) -> State:
        """Cancel timers, recording how long the current hint has been shown."""
        timer = self._timers.get(HINT)
        if timer is not None and timer.active:
            state = hint_tick(state, self._scheduler.now_ms - self._hint_shown_at_ms)
        self._cancel_timers()
        return state

    def _sync_timers(self) -> None:
        if self._closed or self.state.status is not SessionStatus.PLAYING:
            self._cancel_timers()
            return

        if not self.is_timer_running(COUNTDOWN):
            self._timers[COUNTDOWN] = self._scheduler.call_every(
                self._config.countdown_interval_ms, self._on_countdown, COUNTDOWN
            )
        if not self.is_timer_running(PURSUIT):
            self._timers[PURSUIT] = self._scheduler.call_every(
                self._config.pursuit_interval_ms, self._on_pursuit, PURSUIT
            )

        hint = self._current_hint()
        if hint is not None and not self.is_timer_running(HINT):
            self._hint_shown_at_ms = self._scheduler.now_ms
            self._timers[HINT] = self._scheduler.call_later(
                hint.remaining_ms, self._on_hint_expired, HINT
            )
        elif hint is None and HINT in self._timers:
            self._scheduler.cancel(self._timers.pop(HINT))

    def _cancel_timers(self) -> None:
        for timer in self._timers.values():
            self._scheduler.cancel(timer)
        self._timers.clear()

    def _current_hint(self) -> Optional[Hint]:
        agent_id = self.state.agent_id
        if agent_id is None:
            return None
        return self.state.hint.get(agent_id)

    def _next_seed(self) -> int:
        return self._rng.randrange(2**32)

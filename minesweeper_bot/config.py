"""Configuration for the solve loop."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

DEFAULT_ROWS = 16
DEFAULT_COLS = 30
DEFAULT_TICK_INTERVAL_MS = 50
DEFAULT_START_DELAY_MS = 500


class Mode(str, Enum):
    """How ticks are driven by MinesweeperSolver.run()."""

    FAST = "fast"  # synchronous, exhaustive
    TIMED = "timed"  # one tick every tick_interval_ms


# Option names accepted by SolverConfig.from_mapping() besides the field names.
_ALIASES: Dict[str, str] = {
    "tickIntervalMs": "tick_interval_ms",
    "startDelayMs": "start_delay_ms",
    "maxTicks": "max_ticks",
    "recordSteps": "record_steps",
}


@dataclass
class SolverConfig:
    """
    Settings for one solver run.

    Attributes:
        rows: Grid height.
        cols: Grid width.
        tick_interval_ms: Delay between ticks in TIMED mode.
        mode: FAST or TIMED.
        start_delay_ms: Delay before the first tick, giving the game time to
            settle after a restart.
        seed: Seed for the random source used by the first move and fallback
            guesses; None draws from system entropy.
        max_ticks: Upper bound on ticks per game; None means unbounded.
        record_steps: Keep a per-tick history with board snapshots for replay.
    """

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    mode: Mode = Mode.TIMED
    start_delay_ms: int = DEFAULT_START_DELAY_MS
    seed: Optional[int] = None
    max_ticks: Optional[int] = None
    record_steps: bool = False

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if self.tick_interval_ms < 0 or self.start_delay_ms < 0:
            raise ValueError("Delays must be non-negative.")
        if self.max_ticks is not None and self.max_ticks <= 0:
            raise ValueError("max_ticks must be positive when set.")
        if not isinstance(self.mode, Mode):
            try:
                self.mode = Mode(str(self.mode).lower())
            except ValueError:
                raise ValueError(
                    f'mode must be "fast" or "timed", got {self.mode!r}.'
                ) from None

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    @property
    def start_delay(self) -> float:
        """Start delay in seconds."""
        return self.start_delay_ms / 1000.0

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "SolverConfig":
        """
        Build a config from a plain mapping such as parsed JSON.

        Recognizes the field names plus the camelCase aliases
        (tickIntervalMs, startDelayMs, maxTicks, recordSteps).

        Raises:
            ValueError: On unknown option names or invalid values.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown solver option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

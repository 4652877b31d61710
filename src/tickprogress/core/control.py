"""
Progress control.

The control owns the mutable progress state. Every tick or update produces a
fresh ProgressSnapshot and hands it to the update callback.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Generic, Optional, TypeVar

from tickprogress.core.snapshot import SPIN_STATES, ProgressSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")

Updater = Callable[[ProgressSnapshot], None]
CustomSupplier = Callable[[], Optional[T]]

# Saturation bounds for non-finite tick values, the signed 64-bit range.
MAX_TICKS = 2 ** 63 - 1
MIN_TICKS = -(2 ** 63)


def current_millis() -> int:
    """Return the wall clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def to_ticks(value: float) -> int:
    """Truncate a number to whole ticks.

    NaN becomes 0 and infinities saturate at MAX_TICKS or MIN_TICKS.
    """
    if isinstance(value, int):
        return value
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return MAX_TICKS if value > 0 else MIN_TICKS
    return int(value)


def _ignore_update(snapshot: ProgressSnapshot) -> None:
    pass


@dataclass
class ProgressSettings(Generic[T]):
    """Construction settings for a ProgressControl.

    Attributes:
        total_ticks: Number of ticks needed to complete (can be changed later)
        start_ticks: Initial number of ticks, -1 starts undefined
        ticks_per_step: Ticks advanced by a tick() call without arguments
        time_provider: Returns the current time in milliseconds
        update_immediately: Call the updater once as soon as it is installed
        default: Initial and post-reset value of the custom data
    """
    total_ticks: int = 100
    start_ticks: int = 0
    ticks_per_step: int = 1
    time_provider: Callable[[], int] = field(default=current_millis)
    update_immediately: bool = False
    default: Optional[T] = None


class ProgressControl(Generic[T]):
    """Advances progress and publishes snapshots of it."""

    def __init__(self, settings: Optional[ProgressSettings[T]] = None, updater: Optional[Updater] = None):
        """Initialize progress control.

        Args:
            settings: Construction settings, defaults apply when omitted
            updater: Callback receiving every new snapshot
        """
        settings = settings or ProgressSettings()

        self.total_ticks = int(settings.total_ticks)
        self.ticks_per_step = int(settings.ticks_per_step)

        self._time_provider = settings.time_provider
        self._default_custom = settings.default
        self._current_ticks = self._clamp(int(settings.start_ticks))
        self._start_time = self._time_provider()
        self._spin_phase = 0
        self._last_custom: CustomSupplier = self._default_supplier
        self._updater: Updater = _ignore_update

        self._progress: ProgressSnapshot[T] = self._snapshot()

        logger.debug(
            f"Created progress control at {self._current_ticks}/{self.total_ticks} ticks"
        )

        self.on_update(settings.update_immediately, updater)

    @property
    def current_ticks(self) -> int:
        """Current number of ticks."""
        return self._current_ticks

    @property
    def value(self) -> float:
        """Current progress as a ratio, negative while undefined."""
        return self._current_ticks / self.total_ticks

    @property
    def is_undefined(self) -> bool:
        """True while the number of ticks is negative."""
        return self._current_ticks < 0

    @property
    def progress(self) -> ProgressSnapshot[T]:
        """The most recent snapshot."""
        return self._progress

    def update(self, new_value: float, custom: Optional[CustomSupplier] = None) -> None:
        """Set the progress to a new ratio.

        The ratio is re-expressed as a whole number of ticks, so the
        resulting value can differ slightly from the one given.

        Args:
            new_value: New progress ratio, negative values make progress undefined
            custom: New supplier for the custom data, previous one is kept if None
        """
        self._current_ticks = self._clamp(to_ticks(self.total_ticks * new_value))
        if custom is not None:
            self._last_custom = custom
        self._advance()

    def tick(self, ticks: Optional[float] = None, custom: Optional[CustomSupplier] = None) -> None:
        """Advance the progress by a number of ticks.

        Args:
            ticks: Ticks to advance by (default: ticks_per_step), can be negative
            custom: New supplier for the custom data, previous one is kept if None
        """
        if ticks is None:
            ticks = self.ticks_per_step
        self._current_ticks = self._clamp(self._current_ticks + to_ticks(ticks))
        if custom is not None:
            self._last_custom = custom
        self._advance()

    def on_update(self, update_immediately: bool = False, updater: Optional[Updater] = None) -> None:
        """Replace the callback executed on every update or tick.

        Args:
            update_immediately: Call the new callback right away
            updater: Callback receiving the new snapshot, None disables callbacks
        """
        self._updater = updater or _ignore_update
        if update_immediately:
            self._advance()

    def reset(self, update: bool = True) -> None:
        """Reset ticks, start time, spinner and custom data.

        Args:
            update: Call the update callback after resetting
        """
        self._current_ticks = 0
        self._start_time = self._time_provider()
        self._spin_phase = 0
        self._last_custom = self._default_supplier
        logger.debug("Progress control reset")

        if update:
            self._advance()
        else:
            self._progress = self._snapshot()

    def _default_supplier(self) -> Optional[T]:
        return self._default_custom

    def _clamp(self, ticks: int) -> int:
        return max(-1, min(ticks, self.total_ticks))

    def _snapshot(self) -> ProgressSnapshot[T]:
        elapsed = self._time_provider() - self._start_time
        return ProgressSnapshot(
            current_ticks=self._current_ticks,
            total_ticks=self.total_ticks,
            duration=timedelta(milliseconds=elapsed),
            spin_phase=self._spin_phase,
            custom_creator=self._last_custom,
        )

    def _advance(self) -> None:
        self._progress = self._snapshot()
        self._spin_phase = (self._spin_phase + 1) % len(SPIN_STATES)
        self._updater(self._progress)


def control(
    total_ticks: float = 100,
    start_ticks: float = 0,
    ticks_per_step: float = 1,
    time_provider: Callable[[], int] = current_millis,
    update_immediately: bool = False,
    updater: Optional[Updater] = None
) -> ProgressControl[None]:
    """Create a progress control without custom data.

    Args:
        total_ticks: Number of ticks needed to complete (can be changed later)
        start_ticks: Initial number of ticks
        ticks_per_step: Ticks advanced by default per tick() call
        time_provider: Returns the current time in milliseconds, mainly for testing
        update_immediately: Call the updater before returning the control
        updater: Progress update callback (can be replaced later)

    Returns:
        Progress control
    """
    settings: ProgressSettings[None] = ProgressSettings(
        total_ticks=int(total_ticks),
        start_ticks=int(start_ticks),
        ticks_per_step=int(ticks_per_step),
        time_provider=time_provider,
        update_immediately=update_immediately,
    )
    return ProgressControl(settings, updater)


def custom_control(
    total_ticks: float = 100,
    start_ticks: float = 0,
    ticks_per_step: float = 1,
    time_provider: Callable[[], int] = current_millis,
    update_immediately: bool = False,
    default: Optional[T] = None,
    updater: Optional[Updater] = None
) -> ProgressControl[T]:
    """Create a progress control that also carries custom data.

    Args:
        total_ticks: Number of ticks needed to complete (can be changed later)
        start_ticks: Initial number of ticks
        ticks_per_step: Ticks advanced by default per tick() call
        time_provider: Returns the current time in milliseconds, mainly for testing
        update_immediately: Call the updater before returning the control
        default: Initial value of the custom data
        updater: Progress update callback (can be replaced later)

    Returns:
        Progress control
    """
    settings = ProgressSettings(
        total_ticks=int(total_ticks),
        start_ticks=int(start_ticks),
        ticks_per_step=int(ticks_per_step),
        time_provider=time_provider,
        update_immediately=update_immediately,
        default=default,
    )
    return ProgressControl(settings, updater)

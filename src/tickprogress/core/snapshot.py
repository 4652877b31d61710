"""
Immutable progress snapshots.

A snapshot captures the state of a progress control at one instant and
exposes pre-formatted views of it. Every derived view is computed on first
access and cached for the lifetime of the snapshot.
"""

import math
from dataclasses import dataclass, field
from datetime import timedelta
from functools import cached_property
from typing import Callable, Generic, Optional, TypeVar

from tickprogress.utils.formatting import (
    format_bytes,
    format_duration,
    format_fixed,
    format_rate,
    whole_seconds,
)

T = TypeVar("T")

SPIN_STATES = ("|", "/", "-", "\\")


def _no_custom() -> None:
    return None


@dataclass(frozen=True)
class ProgressSnapshot(Generic[T]):
    """Progress status at one instant plus display-ready views of it.

    Attributes:
        current_ticks: Current number of ticks, -1 when progress is undefined
        total_ticks: Number of ticks needed to complete
        duration: Elapsed time since the control was created or reset
        spin_phase: Index into SPIN_STATES
        custom_creator: Supplier of the custom data, called at most once
    """
    current_ticks: int
    total_ticks: int
    duration: timedelta = timedelta(0)
    spin_phase: int = 0
    custom_creator: Callable[[], Optional[T]] = field(default=_no_custom, compare=False, repr=False)

    @property
    def is_undefined(self) -> bool:
        """True if the progress is undefined."""
        return self.current_ticks < 0

    @cached_property
    def custom(self) -> Optional[T]:
        """Custom data, only created when requested."""
        return self.custom_creator()

    @cached_property
    def current(self) -> str:
        """Current number of ticks, padded to the width of the total."""
        width = int(math.log10(self.total_ticks)) + 1
        if self.is_undefined:
            return "~".rjust(width)
        return str(self.current_ticks).rjust(width)

    @cached_property
    def total(self) -> str:
        """Total number of ticks."""
        return str(self.total_ticks)

    @cached_property
    def percent_value(self) -> float:
        """Progress as a ratio, nominally between 0.0 and 1.0."""
        return self.current_ticks / self.total_ticks

    @cached_property
    def percent(self) -> str:
        """Progress in percent, floored to one decimal place."""
        if self.is_undefined:
            return "~ %".rjust(6)
        floored = math.floor(10000 * self.percent_value) / 100
        return f"{format_fixed(floored, 1)}%".rjust(6)

    @cached_property
    def bar(self) -> str:
        """Default bar, 20 characters of '=' and '-'."""
        return self.make_bar()

    def make_bar(self, length: int = 20, filled: str = "=", empty: str = "-", undefined: str = "~") -> str:
        """Create a progress bar.

        Args:
            length: Length of the bar in characters
            filled: Character used for the completed part
            empty: Character used for the remaining part
            undefined: Character used for the whole bar when progress is undefined

        Returns:
            Bar string of exactly ``length`` characters
        """
        if 0.0 <= self.percent_value <= 1.0:
            n = math.floor(self.percent_value / (1.0 / length))
            return filled * n + empty * (length - n)
        return undefined * length

    @cached_property
    def elapsed(self) -> str:
        """Elapsed time since the control was created or reset."""
        return format_duration(self.duration).rjust(6)

    @cached_property
    def eta(self) -> str:
        """Estimated time left, linearly extrapolated from the elapsed time."""
        if self.current_ticks <= 0:
            return " ~ s".rjust(6)
        remaining = self.duration // self.current_ticks * (self.total_ticks - self.current_ticks)
        return format_duration(remaining).rjust(6)

    @cached_property
    def bytes(self) -> str:
        """Current number of ticks formatted as bytes."""
        return format_bytes(self.current_ticks, self.is_undefined).rjust(8)

    @cached_property
    def total_bytes(self) -> str:
        """Total number of ticks formatted as bytes."""
        return format_bytes(self.total_ticks, self.is_undefined).strip()

    @cached_property
    def rate(self) -> str:
        """Ticks per second formatted as a byte rate."""
        seconds = whole_seconds(self.duration)
        if seconds < 1 or self.is_undefined:
            return "~  B/s".rjust(9)
        return format_rate(self.current_ticks / seconds).rjust(9)

    @cached_property
    def spin(self) -> str:
        """Spinner glyph that changes with every update."""
        return SPIN_STATES[self.spin_phase]

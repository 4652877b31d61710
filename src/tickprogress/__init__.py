"""
Progress tracking with ready-made display values.

A ProgressControl counts ticks towards a total and publishes an immutable
ProgressSnapshot on every change. Snapshots format percentage, bar, elapsed
time, ETA, byte counts, byte rate and a spinner on demand.
"""

__version__ = "0.1.0"

from .core.snapshot import ProgressSnapshot, SPIN_STATES
from .core.control import (
    ProgressControl, ProgressSettings,
    control, custom_control, current_millis
)
from .core.iteration import (
    with_progress, iter_with_progress, for_each_block_with_progress
)
from .ui.progress import (
    ProgressLine, COLLECTION_FORMAT, ITERABLE_FORMAT, BYTES_FORMAT
)

__all__ = [
    "__version__",

    # Snapshot
    "ProgressSnapshot", "SPIN_STATES",

    # Control
    "ProgressControl", "ProgressSettings",
    "control", "custom_control", "current_millis",

    # Iteration
    "with_progress", "iter_with_progress", "for_each_block_with_progress",

    # Rendering
    "ProgressLine", "COLLECTION_FORMAT", "ITERABLE_FORMAT", "BYTES_FORMAT"
]

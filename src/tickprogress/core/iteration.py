"""
Iteration helpers with progress.

These wrap collections, arbitrary iterables and files so that every element
or block read advances a progress control.
"""

import logging
from pathlib import Path
from typing import Callable, Collection, Iterable, Iterator, Optional, TypeVar, Union

from tickprogress.core.control import Updater, custom_control, control
from tickprogress.ui.progress import (
    BYTES_FORMAT,
    COLLECTION_FORMAT,
    ITERABLE_FORMAT,
    ProgressLine,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")

DEFAULT_BLOCK_SIZE = 4096
MINIMUM_BLOCK_SIZE = 512


def with_progress(collection: Collection[E], updater: Optional[Updater] = None) -> Iterator[E]:
    """Iterate over a sized collection while reporting progress.

    Each element is ticked before it is yielded and becomes the custom data
    of its snapshot.

    Args:
        collection: Any collection supporting len()
        updater: Progress callback (default: single-line terminal output)

    Yields:
        The elements of the collection
    """
    line = None
    if updater is None:
        updater = line = ProgressLine(COLLECTION_FORMAT)

    progress = custom_control(total_ticks=len(collection), updater=updater)
    try:
        for element in collection:
            progress.tick(custom=lambda element=element: element)
            yield element
    finally:
        if line is not None:
            line.finish()


def iter_with_progress(iterable: Iterable[E], updater: Optional[Updater] = None) -> Iterator[E]:
    """Iterate over an iterable of unknown length while reporting activity.

    The progress stays undefined, so only the spinner and the elapsed time
    carry information.

    Args:
        iterable: Any iterable, including infinite generators
        updater: Progress callback (default: spinner and elapsed time)

    Yields:
        The elements of the iterable
    """
    line = None
    if updater is None:
        updater = line = ProgressLine(ITERABLE_FORMAT)

    progress = custom_control(start_ticks=-1, updater=updater)
    try:
        for element in iterable:
            progress.tick(0, custom=lambda element=element: element)
            yield element
    finally:
        if line is not None:
            line.finish()


def for_each_block_with_progress(
    path: Union[str, Path],
    action: Callable[[bytes, int], None],
    block_size: int = DEFAULT_BLOCK_SIZE,
    updater: Optional[Updater] = None
) -> int:
    """Read a file block by block while reporting byte progress.

    Args:
        path: File to read
        action: Called with each block and the number of bytes in it
        block_size: Bytes per block, raised to MINIMUM_BLOCK_SIZE if smaller
        updater: Progress callback (default: bytes, rate and eta)

    Returns:
        Total number of bytes read

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    block_size = max(block_size, MINIMUM_BLOCK_SIZE)

    line = None
    if updater is None:
        updater = line = ProgressLine(BYTES_FORMAT)

    progress = control(total_ticks=path.stat().st_size, updater=updater)
    logger.debug(f"Reading {path} in blocks of {block_size} bytes")

    bytes_total = 0
    try:
        with open(path, "rb") as f:
            while True:
                buffer = f.read(block_size)
                if not buffer:
                    break
                action(buffer, len(buffer))
                progress.tick(len(buffer))
                bytes_total += len(buffer)
    finally:
        if line is not None:
            line.finish()

    return bytes_total

"""Progress reporting and cooperative cancellation.

Pipeline stages process rows in bands and call :func:`report` between
bands, which raises :class:`RenderCancelled` once the caller's cancel
event is set.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator

from imgmod.constants import MIN_BAND_ROWS

ProgressCallback = Callable[[float], None]
CancelEvent = threading.Event


class RenderCancelled(Exception):
    """Raised when a render is cancelled before it completes."""


def report(
    progress_callback: ProgressCallback | None,
    value: float,
    cancel_event: CancelEvent | None = None,
) -> None:
    """Check for cancellation, then report progress.

    :param progress_callback: Called with a fraction in [0, 1], or None
    :param value: Progress fraction
    :param cancel_event: Event that aborts the render when set, or None
    :raises RenderCancelled: If cancel_event is set
    """
    if cancel_event is not None and cancel_event.is_set():
        raise RenderCancelled()
    if progress_callback is not None:
        progress_callback(value)


def iter_bands(height: int, band_rows: int) -> Iterator[tuple[int, int]]:
    """Yield non-empty [start, end) row ranges covering 0..height."""
    band_rows = max(MIN_BAND_ROWS, int(band_rows))
    for start in range(0, height, band_rows):
        yield start, min(height, start + band_rows)


def lerp_range(progress_range: tuple[float, float], fraction: float) -> float:
    """Map a local fraction into a sub-range of overall progress."""
    start, end = progress_range
    return start + (end - start) * fraction

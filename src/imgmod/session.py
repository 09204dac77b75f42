"""Interactive edit session over a single source image.

An EditSession holds the original Bitmap, the user's current parameter
values, and the most recently committed render. Renders always start from
the original, never from a previous output.

Rendering is explicit: the caller decides when to call :meth:`apply` (or
:meth:`request` + :meth:`render` when rendering on a worker thread).
Requests follow a last-request-wins policy: issuing a new request cancels
the previous one, and a finished render is committed only if no newer
request exists.

Example:
    >>> session = EditSession.from_file("photo.png")
    >>> session.set_values(brightness=120, saturation=80)
    >>> session.set_size(640, 480)
    >>> preview = session.apply()
    >>> session.export().save("downloads")
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from pathlib import Path

from imgmod.bitmap import Bitmap
from imgmod.codec import ExportResult, decode_bitmap, export_bitmap, load_bitmap
from imgmod.config.values import AdjustmentValues, TargetSize
from imgmod.constants import DEFAULT_BAND_ROWS, DEFAULT_RESAMPLE_POLICY
from imgmod.pipeline import adjust_image
from imgmod.progress import ProgressCallback, RenderCancelled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderTicket:
    """A render request: generation number, parameter snapshot, cancel flag.

    Attributes:
        generation: Monotonic request number within the session
        values: Clamped values captured when the request was made
        size: Validated target size captured when the request was made
        cancel_event: Set when the request is superseded or cancelled
    """

    generation: int
    values: AdjustmentValues
    size: TargetSize
    cancel_event: threading.Event = field(default_factory=threading.Event, compare=False)

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()


class EditSession:
    """Editing state for one source image.

    :param source: Decoded original image (never modified)
    :param policy: Resample policy used for every render
    :param band_rows: Rows processed between cancellation checks
    """

    def __init__(
        self,
        source: Bitmap,
        *,
        policy: str = DEFAULT_RESAMPLE_POLICY,
        band_rows: int = DEFAULT_BAND_ROWS,
    ):
        self._source = source
        self.policy = policy
        self.band_rows = band_rows

        self._values = AdjustmentValues()
        self._size = TargetSize.of(source)

        # Guards parameters, generation bookkeeping and the committed output
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: RenderTicket | None = None
        self._committed: RenderTicket | None = None
        self._current = source

        logger.debug("[EditSession] Opened %dx%d source", source.width, source.height)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs) -> EditSession:
        """Open a session on an image file."""
        return cls(load_bitmap(path), **kwargs)

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> EditSession:
        """Open a session on encoded image bytes."""
        return cls(decode_bitmap(data), **kwargs)

    # ========================================================================
    # Parameters
    # ========================================================================

    @property
    def original(self) -> Bitmap:
        return self._source

    @property
    def current(self) -> Bitmap:
        """Most recently committed render (the original until the first apply)."""
        with self._lock:
            return self._current

    @property
    def values(self) -> AdjustmentValues:
        with self._lock:
            return replace(self._values)

    @property
    def size(self) -> TargetSize:
        with self._lock:
            return self._size

    def set_values(self, **kwargs) -> AdjustmentValues:
        """Update some adjustment values; out-of-range input is clamped.

        :param kwargs: Any of brightness, contrast, saturation, quality
        :returns: The clamped values now in effect
        :raises TypeError: If an unknown parameter name is given
        :raises ValueError: If a value is not a number
        """
        with self._lock:
            self._values = replace(self._values, **kwargs).clamp()
            return replace(self._values)

    def set_size(self, width: int, height: int) -> TargetSize:
        """Set output dimensions; they are validated when a render is requested."""
        with self._lock:
            self._size = TargetSize(width, height)
            return self._size

    def reset(self) -> None:
        """Restore neutral values and native size. The displayed output is kept."""
        with self._lock:
            self._values = AdjustmentValues()
            self._size = TargetSize.of(self._source)

    def is_stale(self) -> bool:
        """True if the current parameters differ from the last committed render."""
        with self._lock:
            committed = self._committed
            values = self._values
            size = self._size
        if committed is None:
            return not (values.is_neutral() and size.matches(self._source))
        return committed.values != values or committed.size != size

    # ========================================================================
    # Rendering
    # ========================================================================

    def request(self) -> RenderTicket:
        """Create a render request and cancel any older one.

        :returns: Ticket capturing the current values and size
        :raises ValueError: If the current size is not positive
        """
        with self._lock:
            size = self._size.validate()
            self._generation += 1
            if self._latest is not None:
                self._latest.cancel()
            ticket = RenderTicket(self._generation, replace(self._values), size)
            self._latest = ticket
        logger.debug("[EditSession] Requested render #%d", ticket.generation)
        return ticket

    def is_latest(self, ticket: RenderTicket) -> bool:
        with self._lock:
            return ticket is self._latest

    def render(
        self, ticket: RenderTicket, progress_callback: ProgressCallback | None = None
    ) -> Bitmap | None:
        """Render a ticket from the original image.

        :param ticket: Ticket from :meth:`request`
        :param progress_callback: Receives progress fractions in [0, 1]
        :returns: The committed Bitmap, or None if the ticket was superseded
        """
        if ticket.cancelled or not self.is_latest(ticket):
            logger.debug("[EditSession] Skipping superseded render #%d", ticket.generation)
            return None

        try:
            result = adjust_image(
                self._source,
                ticket.size,
                ticket.values,
                policy=self.policy,
                band_rows=self.band_rows,
                cancel_event=ticket.cancel_event,
                progress_callback=progress_callback,
            )
        except RenderCancelled:
            logger.debug("[EditSession] Render #%d cancelled", ticket.generation)
            return None

        with self._lock:
            if ticket is not self._latest:
                logger.debug("[EditSession] Discarding stale render #%d", ticket.generation)
                return None
            self._current = result
            self._committed = ticket

        logger.info("[EditSession] Committed render #%d", ticket.generation)
        return result

    def apply(self, progress_callback: ProgressCallback | None = None) -> Bitmap:
        """Render the current parameters synchronously.

        :param progress_callback: Receives progress fractions in [0, 1]
        :returns: The displayed output after this call
        :raises ValueError: If the current size is not positive
        """
        ticket = self.request()
        result = self.render(ticket, progress_callback)
        return self.current if result is None else result

    def cancel(self) -> None:
        """Cancel the latest outstanding request, if any."""
        with self._lock:
            if self._latest is not None:
                self._latest.cancel()

    # ========================================================================
    # Export
    # ========================================================================

    def export(self, quality: int | None = None) -> ExportResult:
        """Encode the displayed output for download.

        Without an override, the quality is the one captured by the render
        being displayed, or the session's quality before the first apply.

        :param quality: Override quality
        :returns: ExportResult named ``processed-image.jpg``
        """
        with self._lock:
            current = self._current
            if quality is None:
                applied = self._values if self._committed is None else self._committed.values
                quality = applied.quality
        result = export_bitmap(current, quality)
        logger.info(
            "[EditSession] Exported %s (%d bytes, quality=%d)",
            result.filename,
            len(result),
            result.quality,
        )
        return result

"""Build the simplified tracking result returned to clients."""

from __future__ import annotations

from typing import Optional, Sequence

from zaitrack.tracking.types import Event, TrackingResult, event_field


def tracking_to_simple_status(events: Sequence[Event], tracking_number: Optional[str]) -> TrackingResult:
    """Wrap extracted events into a TrackingResult.

    - shipping: the caller's tracking number, else the first event's own
      `shipping` field, else None
    - last_status: the first event; the portal lists activity newest-first
      and that order is trusted, not re-derived
    - events: passed through without copying
    """
    first = events[0] if events else None
    shipping = tracking_number if tracking_number else event_field(first, "shipping")
    return TrackingResult(shipping=shipping, last_status=first, events=events)

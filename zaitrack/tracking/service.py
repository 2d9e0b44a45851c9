"""Tracking lookup pipeline: fetch -> extract -> normalize."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from zaitrack.carrier.controlbox import fetch_tracking_html
from zaitrack.extraction.activity_blocks import extract_statuses
from zaitrack.extraction.embedded_data import extract_tracking_json
from zaitrack.tracking.errors import ParseError, ValidationError
from zaitrack.tracking.normalize import tracking_to_simple_status
from zaitrack.tracking.types import Event, TrackingResult


logger = logging.getLogger(__name__)

MISSING_TRACKING_MESSAGE = "Falta el número de seguimiento."


def normalize_tracking_number(value: Any) -> str:
    tracking = str(value or "").strip()
    if not tracking:
        raise ValidationError(MISSING_TRACKING_MESSAGE)
    return tracking


def parse_tracking_html(html: str) -> List[Event]:
    """Events from the activity widget, or from the embedded payload when the widget is empty.

    A page without a usable payload yields [] (fresh guides have no activity).
    """
    events: List[Event] = list(extract_statuses(html))
    if events:
        logger.debug(f"Activity widget yielded {len(events)} events")
        return events
    try:
        events = extract_tracking_json(html)
    except ParseError as e:
        logger.debug(f"No embedded tracking payload: {e}")
        return []
    logger.debug(f"Embedded payload yielded {len(events)} events")
    return events


def track_shipment(tracking_number: Any, *, fetch: Optional[Callable[[str], str]] = None) -> TrackingResult:
    """Look up one tracking number against the carrier portal."""
    tracking = normalize_tracking_number(tracking_number)
    html = (fetch or fetch_tracking_html)(tracking)
    events = parse_tracking_html(html)
    logger.info(f"Tracking {tracking}: {len(events)} events")
    return tracking_to_simple_status(events, tracking)

"""Shared tracking data types."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Dict, Optional, Sequence, Union


@dataclass(frozen=True)
class TrackingEvent:
    """One row of the carrier's activity timeline.

    Produced only by the structural extractor, so `timestamp` always holds at
    least one digit and no field carries template source.
    """

    timestamp: str
    status: str
    detail: str = ""


# Elements decoded from the embedded payload are opaque: usually objects with
# the carrier's own field names, but passed through whatever their shape.
Event = Union[TrackingEvent, Any]


def event_to_json(event: Event) -> Any:
    if is_dataclass(event) and not isinstance(event, type):
        return asdict(event)
    return event


def event_field(event: Optional[Event], name: str) -> Any:
    if event is None:
        return None
    if isinstance(event, dict):
        return event.get(name)
    if isinstance(event, TrackingEvent):
        return getattr(event, name, None)
    return None


def event_timestamp(event: Optional[Event]) -> str:
    return event_field(event, "timestamp") or event_field(event, "date") or ""


def event_detail(event: Optional[Event]) -> str:
    return event_field(event, "detail") or event_field(event, "location") or ""


def event_status(event: Optional[Event]) -> str:
    return event_field(event, "status") or event_field(event, "detail") or "Actualización de estado"


@dataclass(frozen=True)
class TrackingResult:
    shipping: Any
    last_status: Optional[Event]
    events: Sequence[Event] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shipping": self.shipping,
            "last_status": event_to_json(self.last_status),
            "events": [event_to_json(e) for e in self.events],
        }

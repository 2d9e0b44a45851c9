"""Tracking lookup exceptions."""

from __future__ import annotations

from typing import Optional


class TrackingError(Exception):
    """Base class for tracking lookup failures"""
    pass


class ValidationError(TrackingError):
    """Missing or empty tracking number (HTTP 400)"""
    pass


class UpstreamError(TrackingError):
    """The carrier portal answered with a non-2xx status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(TrackingError):
    """No usable embedded payload on the page. Callers treat this as "no events"."""
    pass

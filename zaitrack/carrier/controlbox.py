"""Client for the ZAI Cargo tracking page (ControlBox "rastreo" portal).

The portal has no API: we POST the same form the public page submits and get
HTML back. One request per lookup, no retry.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

import requests

from zaitrack.tracking.errors import UpstreamError


logger = logging.getLogger(__name__)

TRACKING_URL = os.environ.get("ZAI_TRACKING_URL", "https://zaicargo.controlbox.net/app/rastreo/rastreo.asp?I=")
USER_AGENT = os.environ.get("ZAI_TRACKING_USER_AGENT", "Mozilla/5.0 (ZaiTrack)")
# Page-size field expected by the search form
FFW = os.environ.get("ZAI_TRACKING_FFW", "00001")
SUBMIT_LABEL = "Buscar"


def _timeout_from_env() -> Optional[float]:
    raw = (os.environ.get("ZAI_TRACKING_TIMEOUT") or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid ZAI_TRACKING_TIMEOUT={raw!r}")
        return None


def build_form(tracking_number: str) -> Dict[str, str]:
    return {
        "nrogui": tracking_number,
        "Submit": SUBMIT_LABEL,
        "ffw": FFW,
    }


def fetch_tracking_html(tracking_number: str, *, url: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """POST the tracking form and return the response HTML.

    Raises UpstreamError on any non-2xx status. Transport errors from
    `requests` propagate unchanged.
    """
    resp = requests.post(
        url or TRACKING_URL,
        data=build_form(tracking_number),
        headers={
            "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
            "User-Agent": USER_AGENT,
        },
        timeout=timeout if timeout is not None else _timeout_from_env(),
    )
    status_code = resp.status_code
    if not 200 <= status_code < 300:
        logger.warning(f"Tracking portal returned HTTP {status_code} for {tracking_number}")
        raise UpstreamError(f"La solicitud de seguimiento falló ({status_code}).", status_code=status_code)
    # requests falls back to ISO-8859-1 for text/html without a charset; the portal serves UTF-8
    if "charset" not in (resp.headers.get("Content-Type") or "").lower():
        resp.encoding = "utf-8"
    return resp.text

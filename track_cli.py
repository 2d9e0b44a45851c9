#!/usr/bin/env python3
"""Look up a ZAI Cargo tracking number from the command line.

Prints the same JSON body `GET /api/track` returns. `--html` parses a saved
tracking page instead of calling the portal (handy when the carrier changes
its markup).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

import requests
from dotenv import load_dotenv


def _format_timeline(result) -> str:
    from zaitrack.tracking.types import event_detail, event_status, event_timestamp

    lines = [f"Guía: {result.shipping or '-'}"]
    if not result.events:
        lines.append("Sin actividad registrada.")
    for ev in result.events:
        meta = " - ".join(p for p in (event_detail(ev), event_timestamp(ev)) if p)
        lines.append(f"* {event_status(ev)}" + (f" ({meta})" if meta else ""))
    return "\n".join(lines)


def main(argv=None) -> int:
    root = os.path.dirname(os.path.abspath(__file__))
    parser = argparse.ArgumentParser(description="Look up a ZAI Cargo shipment")
    parser.add_argument("tracking", nargs="?", default="", help="Tracking (guide) number")
    parser.add_argument("--env", default=os.path.join(root, ".env"), help="Path to .env file")
    parser.add_argument("--html", default=None, help="Parse a saved tracking page instead of fetching")
    parser.add_argument("--timeline", action="store_true", help="Print a readable timeline instead of JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    load_dotenv(args.env)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Imported after load_dotenv so the carrier client sees .env overrides
    from zaitrack.tracking.errors import UpstreamError, ValidationError
    from zaitrack.tracking.service import track_shipment

    fetch = None
    if args.html:
        with open(args.html, "r", encoding="utf-8") as f:
            html = f.read()
        fetch = lambda _tracking: html  # noqa: E731

    try:
        result = track_shipment(args.tracking, fetch=fetch)
    except ValidationError as e:
        print(json.dumps({"error": str(e)}, ensure_ascii=False), file=sys.stderr)
        return 2
    except (UpstreamError, requests.RequestException) as e:
        print(json.dumps({"error": str(e)}, ensure_ascii=False), file=sys.stderr)
        return 1

    if args.timeline:
        print(_format_timeline(result))
    else:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

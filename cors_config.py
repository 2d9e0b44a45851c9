# CORS configuration
import logging
import os

from flask import request
from flask_cors import CORS

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5002",
    "http://127.0.0.1:3000",
]


def _origins_from_env():
    raw = os.environ.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or list(DEFAULT_ORIGINS)


def configure_cors(app):
    # The tracking UI only reads; no credentials or custom auth headers
    CORS(app, resources={
        r"/api/*": {
            "origins": _origins_from_env(),
            "methods": ["GET", "OPTIONS"],
            "allow_headers": ["Content-Type", "X-Requested-With"],
        }
    })

    @app.after_request
    def log_cors(response):
        logger.debug(
            f"CORS - Origin: {request.headers.get('Origin')} "
            f"Method: {request.method} Response: {response.status_code}"
        )
        return response

    return app

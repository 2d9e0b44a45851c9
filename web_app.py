#!/usr/bin/env python3
"""
Flask web application for ZAI Cargo shipment tracking.
Serves the tracking lookup as JSON for the browser UI, plus a health check.
"""

from flask import Flask, jsonify, request
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging
import os
from datetime import datetime
from functools import wraps
from dotenv import load_dotenv

# Load environment variables from .env file (before the carrier client reads them)
load_dotenv()

from cors_config import configure_cors
from zaitrack.tracking.errors import UpstreamError, ValidationError
from zaitrack.tracking.service import track_shipment

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'No se pudo interpretar la respuesta de seguimiento.'
TRACK_RATE_LIMIT = os.environ.get('TRACK_RATE_LIMIT', '60 per minute')
APP_VERSION = '1.0.0'

app = Flask(__name__)
# Configure app to trust proxy headers (nginx forwards X-Forwarded-For, etc.)
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
app = configure_cors(app)
app.json.sort_keys = False
app.json.ensure_ascii = False
app.config['RATELIMIT_ENABLED'] = os.environ.get('RATELIMIT_ENABLED', 'true').lower() != 'false'

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "100 per hour"],
    storage_uri="memory://"
)
limiter.init_app(app)


def handle_tracking_errors(f):
    """Decorator mapping tracking failures to JSON error responses"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except UpstreamError as e:
            logger.warning(f"Upstream error in {f.__name__}: {e}")
            return jsonify({'error': str(e) or GENERIC_ERROR_MESSAGE}), 500
        except Exception as e:
            logger.error(f"Unexpected error in {f.__name__}: {e}", exc_info=True)
            return jsonify({'error': str(e) or GENERIC_ERROR_MESSAGE}), 500
    return decorated_function


@app.route('/api/track', methods=['GET'])
@limiter.limit(TRACK_RATE_LIMIT)
@handle_tracking_errors
def track():
    """Look up a tracking number: GET /api/track?tracking=AAA9821100001"""
    result = track_shipment(request.args.get('tracking'))
    return jsonify(result.to_dict())


@app.route('/api/health')
@limiter.exempt
def health_check():
    """API health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'version': APP_VERSION
    })


@app.errorhandler(404)
def not_found(error):
    """Custom 404 handler"""
    return jsonify({'error': 'Recurso no encontrado.'}), 404


@app.errorhandler(429)
def rate_limit_handler(error):
    """Custom rate limit handler"""
    return jsonify({
        'error': 'Demasiadas solicitudes.',
        'message': 'Intenta de nuevo en un minuto.',
        'retry_after': 60
    }), 429


@app.errorhandler(500)
def internal_error(error):
    """Custom 500 handler"""
    logger.error(f"Internal server error: {error}")
    return jsonify({'error': GENERIC_ERROR_MESSAGE}), 500


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5002))
    debug = os.environ.get('FLASK_ENV') == 'development'

    logger.info(f"Starting tracking API on port {port}")
    logger.info(f"Debug mode: {debug}")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug,
        threaded=True
    )

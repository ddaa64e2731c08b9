"""
Flask application factory.

Creates and configures the Flask app, builds the shared services and
registers all blueprints.
"""
import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger('prompt_architect')

UNEXPECTED_ERROR = 'An unexpected error occurred. Please try again.'


def create_app(services=None):
    """Create and configure the Flask application.

    services: a prebuilt extensions.Services (tests pass fakes); built from
    config when omitted.
    """
    from prompt_architect.config import SECRET_KEY
    from prompt_architect.extensions import EXTENSION_KEY, build_services
    from prompt_architect.logging_config import configure_logging

    app = Flask(__name__)

    configure_logging(app)

    app.secret_key = SECRET_KEY

    if services is None:
        services = build_services()
    app.extensions[EXTENSION_KEY] = services

    # Register blueprints
    from prompt_architect.routes.analytics import bp as analytics_bp
    from prompt_architect.routes.chat import bp as chat_bp
    from prompt_architect.routes.health import bp as health_bp
    from prompt_architect.routes.intake import bp as intake_bp
    from prompt_architect.routes.leads import bp as leads_bp

    app.register_blueprint(chat_bp)
    app.register_blueprint(intake_bp)
    app.register_blueprint(leads_bp)
    app.register_blueprint(analytics_bp)
    app.register_blueprint(health_bp)

    _register_error_handlers(app)

    return app


def _register_error_handlers(app):

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if not request.path.startswith('/api/'):
            return e
        return jsonify({'success': False, 'error': e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=True)
        return jsonify({'success': False, 'error': UNEXPECTED_ERROR}), 500

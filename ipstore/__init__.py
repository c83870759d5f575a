"""
Flask application factory
"""
from typing import Optional
from flask import Flask, jsonify
from flask_cors import CORS
import logging

from ipstore.config import settings
from ipstore.core.store import PulleyIPStore


def create_app(store: Optional[PulleyIPStore] = None):
    """
    Create and configure Flask application

    Args:
        store: IP store to serve (creates a new one if None)

    Returns:
        Flask app instance
    """
    app = Flask(__name__)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Enable CORS
    CORS(app, origins=settings.CORS_ORIGINS)

    app.extensions["ipstore"] = store if store is not None else PulleyIPStore()

    # Register blueprints
    from ipstore.api.events import events_bp
    from ipstore.api.rankings import rankings_bp

    app.register_blueprint(events_bp)
    app.register_blueprint(rankings_bp)

    @app.route("/api")
    def api_root():
        return jsonify(
            {
                "name": settings.APP_NAME,
                "version": settings.APP_VERSION,
                "status": "running",
                "endpoints": {
                    "events": f"{settings.API_PREFIX}/events",
                    "top": f"{settings.API_PREFIX}/top",
                },
            }
        )

    # API info endpoint
    @app.route(f"{settings.API_PREFIX}")
    def api_info():
        return jsonify(
            {
                "name": settings.APP_NAME,
                "version": settings.APP_VERSION,
                "endpoints": {
                    "POST /events": "Record a handled request",
                    "POST /events/batch": "Record a batch of handled requests",
                    "GET /events/health": "Health check",
                    "GET /events/stats": "Store statistics",
                    "GET /top": "Get the most active addresses",
                    "DELETE /top": "Clear all recorded requests",
                },
            }
        )

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500

    return app

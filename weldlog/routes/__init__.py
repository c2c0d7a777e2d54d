# weldlog/routes/__init__.py
"""
Application routes package
"""

from flask import current_app, jsonify

from .fields import register_field_routes
from .upload import upload_blueprint
from .welds import register_weld_routes


def register_health_route(app):
    @app.route(app.config.get("HEALTH_CHECK_ENDPOINT", "/api/health"), methods=["GET"])
    def health_check():
        return jsonify(
            {
                "status": "OK",
                "message": f"{current_app.config.get('APP_NAME', 'Weld Log')} is running",
                "version": current_app.config.get("APP_VERSION"),
            }
        )


def init_routes(app):
    """Initialize all application routes"""
    register_health_route(app)
    register_weld_routes(app)
    register_field_routes(app)
    app.register_blueprint(upload_blueprint)

"""Flask application factory for the AI Deployment Inventory dashboard."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()  # Load .env file if present

from flask import Flask, jsonify
from flask_wtf.csrf import CSRFProtect

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

csrf = CSRFProtect()

VERSION = "0.1.0"


def create_app(testing: bool = False):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "dev-dashboard-key")
    app.config["WTF_CSRF_TIME_LIMIT"] = 3600
    app.config["TESTING"] = testing

    csrf.init_app(app)

    from web.routes.api import bp as api_bp
    from web.routes.reports import bp as reports_bp

    app.register_blueprint(api_bp, url_prefix="/api/v1")
    app.register_blueprint(reports_bp, url_prefix="/reports")
    csrf.exempt(api_bp)

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "version": VERSION}), 200

    # Start scheduler (only in non-testing mode)
    if not app.config.get("TESTING"):
        from web.scheduler import init_scheduler
        init_scheduler(app)

    return app

"""ABOUTME: Flask application factory with configuration, blueprints, and error handling
ABOUTME: Creates and configures the Flask app, acquiring the database handle once at startup"""

from flask import Flask, jsonify
from flask.typing import ResponseReturnValue
from sqlalchemy.orm import sessionmaker
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

import gamehub.logging
from gamehub import bootstrap, config
from gamehub.adapters import database
from gamehub.adapters.email import EmailAdapter, get_email_adapter
from gamehub.adapters.template_renderer import FlaskTemplateRenderer
from gamehub.adapters.url_generator import FlaskURLGenerator
from gamehub.entrypoints.extensions import AppResources, init_extensions


def create_app(
    config_name: str = "",
    session_factory: sessionmaker | None = None,
    email_adapter: EmailAdapter | None = None,
) -> Flask:
    """
    Flask application factory.

    Args:
        config_name: Configuration name (development, testing, production)
        session_factory: Use this database handle instead of connecting to DATABASE_URL
        email_adapter: Use this notifier instead of the one picked from the mail settings

    Returns:
        Configured Flask application instance

    Raises:
        InvalidConfig: If DATABASE_URL is missing
        DatabaseError: If the database cannot be reached
    """
    gamehub.logging.logging_setup(config.get_log_level())

    app = Flask(__name__, template_folder=str(config.get_templates_path()))

    # Load configuration
    flask_config = config.get_config(config_name)
    app.config.from_object(flask_config)
    # keep response fields in the order the views build them
    app.json.sort_keys = False  # type: ignore[attr-defined]

    # Trust 1 layer of proxy, so confirmation links get the public scheme and host
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore[method-assign]

    if session_factory is None:
        flask_config.validate()
        session_factory = bootstrap.bootstrap(database_url=flask_config.DATABASE_URL)
        if flask_config.TESTING:
            database.create_tables(session_factory.kw["bind"])
    else:
        bootstrap.bootstrap(session_factory=session_factory)

    resources = AppResources(
        session_factory=session_factory,
        email_adapter=email_adapter or get_email_adapter(flask_config.MAIL),
        template_renderer=FlaskTemplateRenderer(app),
        url_generator=FlaskURLGenerator(app),
    )

    # Initialize extensions
    init_extensions(app, flask_config, resources)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    app.logger.info("GameHub application startup")

    return app


def register_blueprints(app: Flask) -> None:
    """Register application blueprints."""
    from .blueprints.accounts import accounts_bp
    from .blueprints.game import game_bp
    from .blueprints.health import health_bp

    app.register_blueprint(accounts_bp)
    app.register_blueprint(game_bp, url_prefix="/api")
    app.register_blueprint(health_bp)


def register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers for common HTTP errors."""

    @app.errorhandler(404)
    def not_found(error: HTTPException) -> ResponseReturnValue:
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error: HTTPException) -> ResponseReturnValue:
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error: HTTPException) -> ResponseReturnValue:
        app.logger.error(f"Server Error: {error}")
        return jsonify({"error": "Internal server error"}), 500

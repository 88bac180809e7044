"""ABOUTME: Flask extensions initialization and shared resource wiring
ABOUTME: Sets up CORS, security headers, Babel, and the per-process database and mail handles"""

from dataclasses import dataclass

from flask import Flask, current_app, has_request_context, request
from flask_babel import Babel
from flask_cors import CORS
from flask_talisman import Talisman
from sqlalchemy.orm import sessionmaker

from gamehub.adapters.email import EmailAdapter
from gamehub.adapters.template_renderer import TemplateRenderer
from gamehub.adapters.url_generator import URLGenerator
from gamehub.config import FlaskBaseConfig
from gamehub.service_layer.unit_of_work import SqlAlchemyUnitOfWork

EXTENSION_KEY = "gamehub"

# Initialize extensions
cors = CORS()
talisman = Talisman()
babel = Babel()


@dataclass(slots=True, kw_only=True)
class AppResources:
    """Handles acquired once at startup and shared by every request."""

    session_factory: sessionmaker
    email_adapter: EmailAdapter
    template_renderer: TemplateRenderer
    url_generator: URLGenerator


def init_extensions(app: Flask, flask_config: FlaskBaseConfig, resources: AppResources) -> None:
    """Initialize Flask extensions with app instance."""
    # Game clients are served from other origins
    cors.init_app(app, origins=flask_config.CORS_ORIGINS)

    # Initialize Flask-Talisman for security headers
    talisman.init_app(
        app,
        force_https=flask_config.FORCE_HTTPS,
        strict_transport_security=flask_config.FORCE_HTTPS,
        session_cookie_secure=flask_config.FORCE_HTTPS,
        # JSON and plain text only, nothing here should load sub-resources
        content_security_policy={"default-src": "'none'", "frame-ancestors": "'none'"},
    )

    # Initialize Flask-Babel for i18n/l10n
    babel.init_app(app, locale_selector=get_locale)

    app.extensions[EXTENSION_KEY] = resources


def get_locale() -> str:
    """Get the best language match for the request."""
    supported_languages = current_app.config.get("LANGUAGES", ["en"])
    if not has_request_context():
        return supported_languages[0]
    return request.accept_languages.best_match(supported_languages) or supported_languages[0]


def get_resources() -> AppResources:
    resources = current_app.extensions[EXTENSION_KEY]
    assert isinstance(resources, AppResources)
    return resources


def get_unit_of_work() -> SqlAlchemyUnitOfWork:
    """A fresh unit of work on the shared session factory, one per request."""
    return SqlAlchemyUnitOfWork(get_resources().session_factory)

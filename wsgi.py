"""ABOUTME: WSGI entry point for production deployment
ABOUTME: Creates Flask application instance for WSGI servers, or runs the development server"""

from gamehub.config import get_port
from gamehub.entrypoints.flask_app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=get_port())  # noqa: S104

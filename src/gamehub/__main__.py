"""ABOUTME: Runs the GameHub server with `python -m gamehub`
ABOUTME: Listens on PORT, defaulting to 3000"""

from gamehub.config import get_port
from gamehub.entrypoints.flask_app import create_app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=get_port())  # noqa: S104


if __name__ == "__main__":
    main()

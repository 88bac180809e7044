"""ABOUTME: Configuration management for the GameHub Flask application
ABOUTME: Loads environment variables and provides configuration objects for different environments"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class InvalidConfig(Exception):
    """Error for when the config is not valid"""


SQLITE_DB_URI = "sqlite:///:memory:"
DEFAULT_PASSWORD_HASH_METHOD = "scrypt:32768:8:1"
DEFAULT_PORT = 3000


def to_bool(value: str | None, context_str: str = "") -> bool:
    """
    Convert string to boolean. Valid options (after stripping whitespace and making lower-case)
    - False: "false", "no", "off", "0", None, ""
    - True: "true", "yes", "on", "1"

    The `context_str` is there for the error message, to help find the issue.
    """
    if value is None:
        return False
    value = value.lower().strip()
    if value in ("false", "no", "off", "0", ""):
        return False
    if value in ("true", "yes", "on", "1"):
        return True
    raise ValueError(
        f"Cannot convert '{context_str}{value}' to boolean. Valid values are: true/false, 1/0, yes/no, on/off (case-insensitive)"
    )


def bool_environ_get(key: str, default: str = "") -> bool:
    return to_bool(os.environ.get(key, default), context_str=f"{key}=")


def get_db_uri() -> str:
    """The database connection string. Empty when it has not been supplied."""
    return os.environ.get("DATABASE_URL", "").strip()


def get_port() -> int:
    return int(os.environ.get("PORT", DEFAULT_PORT))


def get_password_hash_method() -> str:
    # changing this only affects new hashes - werkzeug hashes record their own method and parameters
    return os.environ.get("PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD)


def is_development() -> bool:
    return os.environ.get("FLASK_ENV", "development").lower().strip() == "development"


def should_log_all_requests() -> bool:
    return bool_environ_get("LOG_ALL_REQUESTS")


def get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper().strip()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise InvalidConfig(f"Unknown LOG_LEVEL '{level_name}'")
    return level


def get_templates_path() -> Path:
    return Path(__file__).parent / "templates"


@dataclass(slots=True, kw_only=True)
class MailCfg:
    host: str
    port: int
    username: str
    password: str
    use_tls: bool
    from_email: str
    from_name: str

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @classmethod
    def from_env(cls) -> "MailCfg":
        return MailCfg(
            host=os.environ.get("MAIL_HOST", "smtp.gmail.com"),
            port=int(os.environ.get("MAIL_PORT", "587")),
            username=os.environ.get("MAIL_USERNAME", ""),
            password=os.environ.get("MAIL_PASSWORD", ""),
            use_tls=bool_environ_get("MAIL_USE_TLS", "true"),
            from_email=os.environ.get("MAIL_FROM", os.environ.get("MAIL_USERNAME", "")),
            from_name=os.environ.get("MAIL_FROM_NAME", "GameHub"),
        )


class FlaskBaseConfig:
    """Base configuration class that loads from environment variables."""

    TESTING = False

    def __init__(self) -> None:
        self.DATABASE_URL = get_db_uri()
        self.SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")
        self.FLASK_ENV: str = os.environ.get("FLASK_ENV", "development")
        self.DEBUG: bool = bool_environ_get("DEBUG", "False")
        self.PORT: int = get_port()

        self.PASSWORD_HASH_METHOD: str = get_password_hash_method()
        self.MAIL = MailCfg.from_env()

        # Babel/i18n configuration
        self.LANGUAGES = [
            lang.strip() for lang in os.environ.get("SUPPORTED_LANGUAGES", "en").split(",") if lang.strip()
        ] or ["en"]
        self.BABEL_DEFAULT_LOCALE = os.environ.get("BABEL_DEFAULT_LOCALE", "en")
        self.BABEL_DEFAULT_TIMEZONE = os.environ.get("BABEL_DEFAULT_TIMEZONE", "UTC")

        # comma separated, "*" allows any origin
        self.CORS_ORIGINS: list[str] = [
            origin.strip() for origin in os.environ.get("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]
        self.FORCE_HTTPS: bool = bool_environ_get("FORCE_HTTPS")

    def validate(self) -> None:
        """Check the settings that the application cannot start without."""
        if not self.DATABASE_URL:
            raise InvalidConfig("DATABASE_URL must be set")


class FlaskConfig(FlaskBaseConfig):
    """Development configuration."""


class FlaskTestConfig(FlaskBaseConfig):
    """Test configuration that uses SQLite in-memory database."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = SQLITE_DB_URI
        self.SECRET_KEY = "test-secret-key-aockgn298zx081238"  # noqa: S105
        self.FLASK_ENV = "testing"
        # keep the test suite fast, the method string still round-trips through werkzeug
        self.PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
        self.FORCE_HTTPS = False


class FlaskProductionConfig(FlaskConfig):
    """Production configuration with stricter defaults."""

    def __init__(self) -> None:
        super().__init__()
        self.FLASK_ENV = "production"

        # Ensure production has proper secret key
        if self.SECRET_KEY == "dev-secret-key-change-in-production":  # noqa: S105
            raise InvalidConfig("SECRET_KEY must be set in production")


def get_config(config_name: str = "") -> FlaskBaseConfig:
    """Return the appropriate configuration based on FLASK_ENV or config_name."""
    env = config_name.strip() or os.environ.get("FLASK_ENV", "development")
    env = env.lower().strip()

    config_classes = {
        "development": FlaskConfig,
        "testing": FlaskTestConfig,
        "production": FlaskProductionConfig,
    }

    # Fall back to development if unknown config
    config_cls = config_classes.get(env, FlaskConfig)
    return config_cls()

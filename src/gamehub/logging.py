"""ABOUTME: Logging configuration - stdlib logging rendered as JSON (or console text in development) by structlog
ABOUTME: Every record passes through a redaction step that strips SQL parameters and password hashes"""

import logging.config
import re
from collections.abc import MutableMapping
from typing import Any

import structlog

from gamehub import config

# SQLAlchemy statement errors end with "[parameters: (...)]" listing the bound values
SQL_PARAMETERS = re.compile(r"\[parameters: [^\n]*\]")
# werkzeug digests: scrypt:32768:8:1$<salt>$<hash>, pbkdf2:sha256:600000$<salt>$<hash>
PASSWORD_HASH = re.compile(r"\b(?:scrypt|pbkdf2)(?::\w+)+\$[^\s'\",)\]]+")
REDACTED = "[redacted]"
# event_dict keys that can carry free text
REDACTED_KEYS = ("event", "exception")


def redact(text: str) -> str:
    """Remove bound SQL parameters and password hashes from a log message."""
    text = SQL_PARAMETERS.sub(f"[parameters: {REDACTED}]", text)
    return PASSWORD_HASH.sub(REDACTED, text)


def redact_secrets(_logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """structlog processor applying `redact` to the message and any rendered traceback."""
    for key in REDACTED_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = redact(value)
    return event_dict


timestamper = structlog.processors.TimeStamper(fmt="iso")

# Applied to records from stdlib loggers (our modules, Flask, werkzeug, SQLAlchemy)
foreign_pre_chain = [
    structlog.stdlib.add_log_level,
    timestamper,
    structlog.processors.format_exc_info,
    redact_secrets,
]

handler_to_use = "dev_console" if config.is_development() else "default"


def _formatter(renderer: Any) -> dict[str, Any]:
    return {
        "()": structlog.stdlib.ProcessorFormatter,
        "processor": renderer,
        "foreign_pre_chain": foreign_pre_chain,
    }


logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": _formatter(structlog.dev.ConsoleRenderer(colors=False)),
        "json": _formatter(structlog.processors.JSONRenderer()),
    },
    "handlers": {
        "default": {"level": "INFO", "class": "logging.StreamHandler", "formatter": "json"},
        "dev_console": {"level": "DEBUG", "class": "logging.StreamHandler", "formatter": "console"},
    },
    "loggers": {
        "": {"handlers": [handler_to_use], "level": "INFO", "propagate": True},
    },
})

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_secrets,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)


def logging_setup(log_level: int = logging.INFO) -> None:
    """Apply the configured level. The JSON handler follows it, the development console always shows DEBUG."""
    handler = logging.getHandlerByName(handler_to_use)
    assert handler is not None
    if handler_to_use == "default":
        handler.setLevel(log_level)

    logging.getLogger().setLevel(log_level)

    if config.should_log_all_requests():
        logging.getLogger().setLevel(logging.DEBUG)
        werkzeug_log = logging.getLogger("werkzeug")
        werkzeug_log.setLevel(logging.DEBUG)
        werkzeug_log.propagate = True

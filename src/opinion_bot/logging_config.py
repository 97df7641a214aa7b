"""Structured JSON logging configuration.

Configures Python stdlib logging to emit one JSON object per line on stdout,
with GCP-compatible field names (`severity`, `timestamp`, `logger`).

Usage:
    from opinion_bot.logging_config import configure_logging
    configure_logging("INFO")
"""

import logging
import logging.config

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "opinion-bot",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply structured JSON logging configuration at the given root level.

    Call once at application startup (in the FastAPI lifespan). Unknown
    level names fall back to INFO.
    """
    config = {**LOGGING_CONFIG, "root": {**LOGGING_CONFIG["root"]}}
    level_name = level.upper()
    if not isinstance(logging.getLevelName(level_name), int):
        level_name = "INFO"
    config["root"]["level"] = level_name
    logging.config.dictConfig(config)

"""
Logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this only wires
the root handlers once at startup.
"""

import logging
import logging.config


def setup_logging(level: str = "info", log_file: str | None = None) -> None:
    """Configure root logging. ``level`` is a name like "info" or "debug"."""
    loglevel = getattr(logging, level.upper(), logging.INFO)

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": loglevel,
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "level": loglevel,
            "filename": log_file,
            "encoding": "utf-8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": list(handlers),
            "level": loglevel,
        },
    })

    # SQL echo and botocore chatter only in debug
    noisy = logging.DEBUG if loglevel == logging.DEBUG else logging.WARNING
    for name in ("sqlalchemy.engine", "botocore", "urllib3"):
        logging.getLogger(name).setLevel(noisy)

# budget_sync/logging_config.py
import logging.config
from pathlib import Path
from typing import Optional

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s "
            "[%(process)d:%(threadName)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "simple",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "verbose",
            "filename": "logs/budget_sync.log",
            "maxBytes": 5_000_000,
            "backupCount": 5,
            "encoding": "utf-8",
        },
    },
    "loggers": {
        "": {
            "level": "DEBUG",
            "handlers": ["console", "file"],
        },
        # google client discovery is chatty at DEBUG
        "googleapiclient": {"level": "WARNING", "propagate": True},
        "urllib3": {"level": "WARNING", "propagate": True},
    },
}


def configure_logging(log_dir: Optional[Path] = None) -> None:
    """Apply ``LOGGING``, writing the log file under ``log_dir``."""
    log_dir = Path(log_dir or "logs")
    log_dir.mkdir(parents=True, exist_ok=True)

    config = {**LOGGING, "handlers": {**LOGGING["handlers"]}}
    config["handlers"]["file"] = {
        **LOGGING["handlers"]["file"],
        "filename": str(log_dir / "budget_sync.log"),
    }
    logging.config.dictConfig(config)

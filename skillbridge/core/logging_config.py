"""
Centralized logging configuration.

Call setup_logging() once at startup; modules use logging.getLogger(__name__).
"""
import logging
import logging.config
from pathlib import Path
from typing import Dict, Any, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root, uvicorn and skillbridge loggers.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
        log_file: Optional path; enables a rotating file handler when given
    """
    level = level.upper()

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed",
                "stream": "ext://sys.stdout"
            }
        },
        "loggers": {
            "": {
                "level": level,
                "handlers": ["console"]
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }
        config["loggers"][""]["handlers"].append("file")
        config["loggers"]["uvicorn"]["handlers"].append("file")

    logging.config.dictConfig(config)
    logging.getLogger(__name__).info(
        "Logging configured - level=%s file=%s", level, log_file or "-"
    )

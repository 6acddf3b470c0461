# app/core/logging.py
import logging
import logging.config

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configura o logging da aplicação (uma vez, no import do app)."""
    level = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "app": {"handlers": ["console"], "level": level, "propagate": False},
            # evita spam de SQL mesmo com LOG_LEVEL=DEBUG
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    })

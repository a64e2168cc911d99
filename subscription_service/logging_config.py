"""
Logging setup for the subscription service.

Development runs get a readable, aligned console format; production runs
get one ``key=value`` line per record so log shippers can split fields
without a JSON dependency.
"""
import logging
import logging.config

from subscription_service.config import Settings

_DEV_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_PROD_FORMAT = 'ts=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'


def configure_logging(settings: Settings) -> None:
    """Apply the process-wide logging configuration derived from *settings*."""
    level = settings.LOG_LEVEL.upper()
    fmt = _DEV_FORMAT if settings.is_development else _PROD_FORMAT

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": fmt}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "subscription_service": {"level": level, "handlers": ["console"], "propagate": False},
                # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise.
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )
    logging.getLogger(__name__).info(
        "Logging configured: env=%s level=%s", settings.APP_ENV, level
    )

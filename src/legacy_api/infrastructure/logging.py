"""Logging setup built on loguru.

Components never configure logging themselves. They take an injectable
``logger`` that defaults to ``get_logger(__name__)``; the app (or the first
``get_logger`` call) decides sinks and levels.
"""

import sys
import typing as t

from loguru import logger

from ..config.settings import Environment, LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

# Request traces (``debug=True``) are logged at this level.
REQUEST_TRACE_LEVEL = LogLevel.INFO

_configured = False


def _development_format(record: "loguru.Record") -> str:
    # Records from loggers not created by get_logger carry no bound name.
    name = "{extra[name]}" if "name" in record["extra"] else "{name}"
    return (
        "<green>{time:HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        f"<cyan>{name}</cyan> - <level>{{message}}</level>\n{{exception}}"
    )


def configure_logger(
    level: LogLevel = LogLevel.INFO,
    environment: Environment = Environment.DEVELOPMENT,
) -> None:
    """Replace all loguru sinks with one suited to the environment.

    Production logs are serialised to JSON for log shippers; development
    and testing get a coloured, human-readable format.
    """
    global _configured

    logger.remove()

    if environment == Environment.PRODUCTION:
        logger.add(sys.stderr, level=level.value, serialize=True)
    else:
        logger.add(
            sys.stderr,
            level=level.value,
            format=_development_format,
            colorize=environment == Environment.DEVELOPMENT,
        )

    _configured = True


def setup_logging(settings: Settings) -> None:
    """Configure logging from application settings."""
    configure_logger(level=settings.log_level, environment=settings.environment)


def enable_request_traces(settings: Settings) -> None:
    """Lower the sink level so request traces are written.

    Leaves the configuration alone when ``settings.log_level`` already lets
    them through.
    """
    if logger.level(settings.log_level.value).no > logger.level(
        REQUEST_TRACE_LEVEL.value
    ).no:
        configure_logger(level=REQUEST_TRACE_LEVEL, environment=settings.environment)


def get_logger(name: str) -> "loguru.Logger":
    """Return a logger bound to ``name``, configuring defaults on first use."""
    if not _configured:
        configure_logger()
    return logger.bind(name=name)


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Drop all sinks so the next get_logger call starts from scratch."""
    global _configured

    logger.remove()
    _configured = False

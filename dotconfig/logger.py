import logging
from typing import Any

import structlog
from structlog.types import EventDict, Processor

LOGGER_NAME = "dotconfig"


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """Drop the duplicate `color_message` some host loggers attach to stdlib records."""
    event_dict.pop("color_message", None)
    return event_dict


def _is_configured() -> bool:
    if structlog.is_configured():
        return True

    # A host application may have wired structlog into the root logger already
    for handler in logging.getLogger().handlers:
        if (isinstance(handler, logging.StreamHandler) and
                isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)):
            return True
    return False


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog and the root logger, unless the host application already did."""
    if _is_configured():
        return

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        drop_color_message_key,
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # The ConsoleRenderer pretty-prints exceptions itself
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # Only for `logging` records that do not come from structlog
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


def get_dotconfig_logger(**initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Get the package logger, optionally pre-bound with context values."""
    return structlog.stdlib.get_logger(LOGGER_NAME, **initial_values)


def init_logger(config):
    """
    Initialize structured logging for the dotconfig package.

    Args:
        config: LoggingConfig with the level and renderer to use

    Returns:
        The package logger
    """
    log_level = "DEBUG" if config.debug else config.level
    setup_logging(json_logs=config.json_logs, log_level=log_level)

    # Applies even when the host application configured logging first
    logging.getLogger(LOGGER_NAME).setLevel(log_level)
    return get_dotconfig_logger()

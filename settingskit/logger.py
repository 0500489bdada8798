import logging
from contextlib import contextmanager
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor


ERROR_VERBOSITY = 1
WARNING_VERBOSITY = 3
DEFAULT_VERBOSITY = 4
MESSAGE_VERBOSITY = 5
MAX_VERBOSITY = 1000


def drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """
    Some servers log the message a second time in the extra `color_message`.
    This processor drops the key from the event dict if it exists.
    """
    event_dict.pop("color_message", None)
    return event_dict


def setup_logging(json_logs: bool = False, log_level: str = "INFO", log_file: Optional[str] = None):
    """Configure structlog for the settingskit package"""

    if structlog.is_configured():
        # structlog is already configured, don't reconfigure
        return

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if (isinstance(handler, logging.StreamHandler) and
            isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)):
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
        # Format the exception only for JSON logs, the ConsoleRenderer pretty-prints them
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # These run ONLY on `logging` entries that do NOT originate within structlog.
        foreign_pre_chain=shared_processors,
        # These run on ALL entries after the pre_chain is done.
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(log_level.upper())


class SettingsStructLogger:
    """
    Structured logger for the settingskit package.

    Exposes the sink used by settings objects: ``add_warning``,
    ``add_error`` and ``add_message``, gated by an integer verbosity level
    (the higher, the chattier).
    """

    def __init__(self, log_name: str = "settingskit", verbosity: int = DEFAULT_VERBOSITY):
        self.logger = structlog.stdlib.get_logger(log_name)
        self._verbosity = max(0, int(verbosity))

    # Verbosity

    def get_verbosity_level(self) -> int:
        return self._verbosity

    def set_verbosity_level(self, level: int):
        self._verbosity = max(0, int(level))

    def is_enabled_for(self, threshold: int) -> bool:
        return self._verbosity >= threshold

    # Settings sink

    def add_message(self, message: str, **kw: Any):
        if self.is_enabled_for(MESSAGE_VERBOSITY):
            self.logger.info(message, **kw)

    def add_warning(self, message: str, **kw: Any):
        if self.is_enabled_for(WARNING_VERBOSITY):
            self.logger.warning(message, **kw)

    def add_error(self, message: str, **kw: Any):
        if self.is_enabled_for(ERROR_VERBOSITY):
            self.logger.error(message, **kw)


@contextmanager
def verbosity(logger, level: int):
    """Temporarily override the verbosity of ``logger``, restoring it on exit."""
    previous = logger.get_verbosity_level()
    logger.set_verbosity_level(level)
    try:
        yield logger
    finally:
        logger.set_verbosity_level(previous)


_default_logger: Optional[SettingsStructLogger] = None


def get_settingskit_logger() -> SettingsStructLogger:
    """Return the process-wide default logger, creating it on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = SettingsStructLogger("settingskit")
    return _default_logger


def init_logger(config):
    """
    Initialize the structured logger for the settingskit package.

    Args:
        config: LoggingSettings (or any object exposing ``verbosity``,
            ``log_level``, ``json_logs`` and ``log_file``)

    Returns:
        SettingsStructLogger: Configured structured logger instance
    """
    setup_logging(
        json_logs=bool(config.json_logs),
        log_level=config.log_level,
        log_file=config.log_file or None,
    )

    logger = get_settingskit_logger()
    logger.set_verbosity_level(config.verbosity)
    return logger

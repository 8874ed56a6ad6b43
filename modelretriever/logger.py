import logging

import structlog
from structlog.types import Processor


LOGGER_NAME = "modelretriever"


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the modelretriever package"""

    # Leave an application that already configured structlog alone
    if structlog.is_configured():
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
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Format the exception only for JSON logs, as we want to pretty-print them when
        # using the ConsoleRenderer
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
        # These run ONLY on `logging` entries that do NOT originate within
        # structlog.
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
    root_logger.setLevel(log_level.upper())


def get_retriever_logger(component: str | None = None):
    """
    Get a structured logger for the modelretriever package.

    Args:
        component: Optional component name bound to every message

    Returns:
        A structlog stdlib bound logger
    """
    logger = structlog.stdlib.get_logger(LOGGER_NAME)
    if component:
        return logger.bind(component=component)
    return logger


def init_logger(settings):
    """
    Initialize structured logging from retriever settings.

    Args:
        settings: RetrieverSettings (or anything with a ``logging`` section)

    Returns:
        Configured structlog logger
    """
    logging_settings = settings.logging
    setup_logging(json_logs=logging_settings.json_logs, log_level=logging_settings.level)
    return get_retriever_logger()

import sys
import logging
import structlog
import logging.handlers
import os
from carecoord.core.config import settings


def setup_logging():
    """
    Global logging setup.
    Bridges structlog onto stdlib logging: JSON lines to a daily rotating
    file, readable key/value lines to stdout.
    """
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    # Append to the root logger instead of replacing uvicorn's handlers
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    common_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    processors = [
        structlog.contextvars.merge_contextvars,  # request_id
        structlog.stdlib.filter_by_level,
        *common_processors,
    ]
    # logger may be None for foreign (stdlib) records, so no filter_by_level here
    foreign_pre_chain = [
        structlog.contextvars.merge_contextvars,
        *common_processors,
    ]

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=foreign_pre_chain,
    ))
    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
        for h in root_logger.handlers
    )
    if not has_console_handler:
        root_logger.addHandler(console_handler)

    log_file_path = None
    if settings.LOG_TO_FILE:
        log_file_path = os.path.join(settings.LOG_DIR, "backend.log")
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=log_file_path,
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(ensure_ascii=False),
            foreign_pre_chain=foreign_pre_chain,
        ))
        has_file_handler = any(isinstance(h, logging.handlers.TimedRotatingFileHandler) for h in root_logger.handlers)
        if not has_file_handler:
            root_logger.addHandler(file_handler)

    # Rendering happens in the handlers' formatters
    structlog.configure(
        processors=processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("logging_setup")
    logger.info("global_logging_initialized", log_file=log_file_path)

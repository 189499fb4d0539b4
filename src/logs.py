import logging
import sys

from loguru import logger

FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward standard ``logging`` records (werkzeug, SQLAlchemy, gunicorn) to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(level="INFO", json_logs=True):
    """Install a single stderr sink, JSON lines when ``json_logs`` is set."""
    level = level.upper()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="{message}" if json_logs else FORMAT,
        serialize=json_logs,
        colorize=not json_logs,
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ('werkzeug', 'gunicorn.error', 'gunicorn.access'):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    return logger

"""Logging setup.

`setup_logging` configures the root logger for the service;
`get_logs_writer_logger` returns a lazily initialized logger that appends
submission audit lines to `{logging_dir}/{filename}` in the message format only.
"""
import logging
import os
from logging import FileHandler, Formatter, getLogger, INFO
from formdesk.app.core.config import settings


def setup_logging(level=settings.LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_logs_writer_logger(logging_dir=settings.LOG_PATH, filename='submissions.log'):
    os.makedirs(logging_dir, exist_ok=True)
    log_path = os.path.join(logging_dir, filename)

    logger = getLogger(f"{__name__}.submissions")

    if logger.handlers:
        return logger

    logger.setLevel(INFO)
    logger.propagate = False

    handler = FileHandler(log_path, mode="a", encoding="utf-8", delay=True)
    handler.setFormatter(Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger

"""
Logging utilities for forwarding export logs to a host UI.

The export pipeline logs through module-level loggers under the
``doc_toolkit`` namespace. ExportRunner attaches a queue handler for the
lifetime of each export so a host can show progress while it runs.
"""
from __future__ import annotations

import logging
from queue import Queue
from typing import Optional

PACKAGE_LOGGER = "doc_toolkit"


def _display_level(levelno: int) -> str:
    """Level name shown to the host; debug detail is shown as INFO."""
    return logging.getLevelName(max(levelno, logging.INFO))


class QueueLogHandler(logging.Handler):
    """
    Puts (message, level name) pairs on a queue.

    When thread_name is given, only records logged from that thread are
    forwarded, so concurrent work in the host does not leak into an
    export's progress feed.
    """

    def __init__(
        self,
        log_queue: Queue,
        level: int = logging.INFO,
        *,
        thread_name: Optional[str] = None,
    ):
        super().__init__(level)
        self.log_queue = log_queue
        self.thread_name = thread_name
        self.setFormatter(logging.Formatter("%(message)s"))

    def filter(self, record: logging.LogRecord) -> bool:
        if self.thread_name is not None and record.threadName != self.thread_name:
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.log_queue.put((self.format(record), _display_level(record.levelno)))
        except Exception:
            self.handleError(record)


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = PACKAGE_LOGGER,
    level: int = logging.INFO,
    *,
    thread_name: Optional[str] = None,
) -> QueueLogHandler:
    """
    Attach a QueueLogHandler to the specified logger.

    Args:
        log_queue: Queue receiving (message, level) pairs
        logger_name: Logger to attach to; None is the root logger
        level: Minimum level forwarded
        thread_name: Only forward records from this thread

    Returns:
        The attached handler, for detach_queue_handler()
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue, level, thread_name=thread_name)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def detach_queue_handler(
    handler: QueueLogHandler,
    logger_name: Optional[str] = PACKAGE_LOGGER,
) -> None:
    """Remove a handler added by attach_queue_handler()."""
    logging.getLogger(logger_name).removeHandler(handler)

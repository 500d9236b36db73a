"""Tests for logging utilities."""
import logging
import threading
from queue import Queue

from doc_toolkit.utils.logging_utils import attach_queue_handler, detach_queue_handler


def test_package_logs_forwarded_to_queue():
    log_queue = Queue()
    handler = attach_queue_handler(log_queue)
    try:
        logging.getLogger("doc_toolkit.export.controller").info("Starting export")
    finally:
        detach_queue_handler(handler)

    assert log_queue.get_nowait() == ("Starting export", "INFO")


def test_debug_reported_as_info():
    log_queue = Queue()
    handler = attach_queue_handler(log_queue, level=logging.DEBUG)
    try:
        logging.getLogger("doc_toolkit.export.layout.slicer").debug("Slice 1")
    finally:
        detach_queue_handler(handler)
        logging.getLogger("doc_toolkit").setLevel(logging.NOTSET)

    assert log_queue.get_nowait() == ("Slice 1", "INFO")


def test_detached_handler_stops_forwarding():
    log_queue = Queue()
    handler = attach_queue_handler(log_queue)
    detach_queue_handler(handler)

    logging.getLogger("doc_toolkit").warning("ignored")

    assert log_queue.empty()


def test_thread_filter_drops_other_threads():
    log_queue = Queue()
    handler = attach_queue_handler(log_queue, thread_name="export_0")
    try:
        logging.getLogger("doc_toolkit").info("from main thread")

        worker = threading.Thread(
            target=lambda: logging.getLogger("doc_toolkit").info("from worker"),
            name="export_0",
        )
        worker.start()
        worker.join()
    finally:
        detach_queue_handler(handler)

    assert log_queue.get_nowait() == ("from worker", "INFO")
    assert log_queue.empty()

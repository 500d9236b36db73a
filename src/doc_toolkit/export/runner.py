"""
Module: export.runner

Purpose:
    Run exports in the background so the caller stays responsive while
    content is rasterized. Exactly one export may be in flight.

Key Classes:
    - ExportRunner: Single-worker executor with an in-flight guard

Dependencies:
    - concurrent.futures: Thread pool execution
    - export.controller: export_document
    - utils.logging_utils: Progress feed for the host

Used By:
    - Host applications exposing the "export" action
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from queue import Queue
from typing import Any, Optional, Sequence

from doc_toolkit.core.errors import ExportInProgressError
from doc_toolkit.core.models import Document
from doc_toolkit.utils.logging_utils import attach_queue_handler, detach_queue_handler

from .config import ExportConfig
from .controller import CancelToken, ExportResult, export_document
from .render import RendererAdapter

logger = logging.getLogger(__name__)


class ExportRunner:
    """
    Background export executor.

    A second submit() while an export is running raises
    ExportInProgressError instead of queueing, so the host can keep its
    export action disabled until the returned Future resolves.

    Usage:
        runner = ExportRunner()
        try:
            future = runner.submit(markup, documents=store.list())
            result = future.result()
        finally:
            runner.shutdown()
    """

    def __init__(
        self,
        renderer: Optional[RendererAdapter] = None,
        progress_queue: Optional[Queue] = None,
    ) -> None:
        """
        Initialize runner.

        Args:
            renderer: Renderer used for every export (default HtmlRenderer)
            progress_queue: Receives (message, level) log pairs from each
                export while it runs
        """
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="export")
        self._renderer = renderer
        self._progress_queue = progress_queue
        self._lock = threading.Lock()
        self._current: Optional[Future] = None
        self._current_token: Optional[CancelToken] = None

    @property
    def busy(self) -> bool:
        """True while an export is in flight."""
        with self._lock:
            return self._current is not None and not self._current.done()

    def submit(
        self,
        region: Any,
        config: Optional[ExportConfig] = None,
        *,
        documents: Sequence[Document] = (),
    ) -> Future:
        """
        Start an export in the background.

        The document list is snapshotted here, before the export starts.

        Returns:
            Future resolving to an ExportResult (or raising the export error)

        Raises:
            ExportInProgressError: If an export is already in flight
        """
        snapshot = tuple(documents)
        with self._lock:
            if self._current is not None and not self._current.done():
                raise ExportInProgressError("An export is already in progress")
            token = CancelToken()
            future = self._executor.submit(
                self._run, region, config, snapshot, token
            )
            self._current = future
            self._current_token = token
        return future

    def cancel(self) -> bool:
        """
        Cancel the in-flight export, if any.

        Returns:
            True if an export was running and has been asked to stop
        """
        with self._lock:
            if self._current is None or self._current.done():
                return False
            self._current_token.cancel()
            # Not yet started: drop it from the queue as well
            self._current.cancel()
            logger.info("Export cancellation requested")
            return True

    def _run(
        self,
        region: Any,
        config: Optional[ExportConfig],
        documents: Sequence[Document],
        token: CancelToken,
    ) -> ExportResult:
        handler = None
        if self._progress_queue is not None:
            handler = attach_queue_handler(
                self._progress_queue, thread_name=threading.current_thread().name
            )
        try:
            return export_document(
                region,
                config,
                documents=documents,
                renderer=self._renderer,
                cancel_token=token,
            )
        except Exception as e:
            logger.error(f"Export failed: {e}")
            raise
        finally:
            if handler is not None:
                detach_queue_handler(handler)

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the worker thread."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ExportRunner":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()

"""Shared machinery for queued log sinks.

Every sink owns one ``SerialWorker``. ``log`` enqueues a write and
returns; the worker performs the writes one at a time in call order.
Subclasses only implement ``_write``, which always runs on the worker
thread and therefore owns the sink's output handle exclusively.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from beacon.core.events import Severity
from beacon.core.protocols import LogSink
from beacon.core.serial_worker import SerialWorker

logger = logging.getLogger(__name__)


class QueuedLogSink(LogSink, ABC):
    """LogSink base that serializes writes on a dedicated worker."""

    def __init__(self, name: str) -> None:
        self._worker = SerialWorker(name=name)

    def log(self, severity: Severity, message: str) -> None:
        self._worker.submit(self._safe_write, severity, message)

    def flush(self, timeout: Optional[float] = None) -> bool:
        return self._worker.flush(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        self._worker.close(timeout)

    @property
    def closed(self) -> bool:
        return self._worker.closed

    def _safe_write(self, severity: Severity, message: str) -> None:
        try:
            self._write(severity, message)
        except Exception as e:
            logger.error(f"[{type(self).__name__}] failed to write log line: {e}")

    @abstractmethod
    def _write(self, severity: Severity, message: str) -> None:
        """Write one line. Runs on the worker thread."""

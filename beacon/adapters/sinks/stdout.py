"""Sink that prints lines to standard output."""

import sys
from typing import Optional, TextIO

from beacon.adapters.sinks.base import QueuedLogSink
from beacon.core.events import Severity


class StdoutLogSink(QueuedLogSink):
    """Writes each message to a text stream, flushing after every line.

    Args:
        stream: Destination stream. Defaults to ``sys.stdout`` as it is
            at construction time.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(name="beacon-stdout-sink")
        self._stream = stream if stream is not None else sys.stdout

    def _write(self, severity: Severity, message: str) -> None:
        self._stream.write(message + "\n")
        self._stream.flush()

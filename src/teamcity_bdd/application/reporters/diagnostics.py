"""Diagnostic buffer: captured error output waiting for attribution.

Injected writable sink. The reporter drains it right before each
boundary message, so text is attributed to the entity that was active
while it was written.
"""

from __future__ import annotations

import threading
from io import StringIO


class DiagnosticBuffer:
    """Accumulating text buffer with file-like write().

    Can be passed wherever a writable text stream is accepted
    (e.g. contextlib.redirect_stderr, logging.StreamHandler).

    Thread Safety:
      - _lock protects _buffer; write() and drain() are atomic
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self) -> None:
        self._buffer = StringIO()
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        """Append text. Returns number of characters written."""
        with self._lock:
            return self._buffer.write(text)

    def writeln(self, text: str) -> None:
        """Append text followed by a newline."""
        self.write(f"{text}\n")

    def flush(self) -> None:
        """No-op. Present for file-like compatibility, see drain()."""

    def getvalue(self) -> str:
        """Return buffered text without clearing it."""
        with self._lock:
            return self._buffer.getvalue()

    @property
    def is_empty(self) -> bool:
        """True if nothing is buffered."""
        return not self.getvalue()

    def drain(self) -> str:
        """Return buffered text and clear the buffer."""
        with self._lock:
            text = self._buffer.getvalue()
            self._buffer = StringIO()
            return text

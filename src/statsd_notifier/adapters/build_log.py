"""Build log adapter.

The build log is the text a CI job shows for the step. It is kept apart from
Python logging, which is configured separately for the tool itself.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class StreamBuildLog:
    """Build log that prints each line to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def println(self, line: str) -> None:
        stream = self._stream or sys.stdout
        print(line, file=stream, flush=True)

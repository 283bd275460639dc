"""Destinations for rendered report lines."""

import sys
from abc import ABC, abstractmethod
from typing import Iterable, Optional, TextIO


class ReportSink(ABC):
    """Receives report text one line at a time."""

    @abstractmethod
    def write_line(self, line: str) -> None:
        """Write a single line."""
        pass

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write_line(line)


class StreamSink(ReportSink):
    """Writes lines to a text stream, stdout by default."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def write_line(self, line: str) -> None:
        # Resolved per call so redirected stdout (tests, pipes) is honoured.
        print(line, file=self.stream or sys.stdout)


class MemorySink(ReportSink):
    """Collects lines in memory."""

    def __init__(self):
        self.lines: list[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

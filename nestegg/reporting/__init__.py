"""Report rendering and output."""

from .formatter import ReportFormatter
from .sink import MemorySink, ReportSink, StreamSink

__all__ = ["ReportFormatter", "ReportSink", "StreamSink", "MemorySink"]

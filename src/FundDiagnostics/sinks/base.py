# ============================================================================
# FundDiagnostics - Base Sink Interface
#
# Purpose: Abstract base class for diagnostic output sinks
# Inputs: Variable name / value pairs
# Outputs: None (records appended to the underlying transport)
# Dependencies: abc, datetime, utils.time
# Usage: class MySink(DiagnosticSink): ...
#
# Changelog:
#   2026-09-02: Initial DiagnosticSink interface
# ============================================================================

from abc import ABC, abstractmethod
from datetime import datetime

from FundDiagnostics.utils.time import format_timestamp


class DiagnosticSink(ABC):
    """
    Abstract base class for diagnostic output sinks.

    A sink is an append-only target for named scalar diagnostics. Every record
    written through one instance carries the same reporting date, fixed at
    construction. The transport (stream, connection) belongs to the caller and
    is never opened or closed by the sink.
    """

    def __init__(self, date: datetime):
        self._date = date

    @property
    def date(self) -> datetime:
        """Reporting date shared by every record of this sink."""
        return self._date

    @property
    def timestamp_text(self) -> str:
        """Textual form of the reporting date used in written records."""
        return format_timestamp(self._date)

    @abstractmethod
    def write_data_point(self, variable_name: str, value: float) -> None:
        """
        Append one record to the sink.

        Args:
            variable_name: Label of the sweep cell (e.g. "SCC-2010-1prtp")
            value: Diagnostic value; NaN and infinities are written as-is

        Raises:
            Exception: Whatever the underlying transport raises, unchanged
        """
        pass

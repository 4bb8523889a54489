# ============================================================================
# FundDiagnostics - File Sink
#
# Purpose: Write diagnostics as semicolon-delimited text lines
# Inputs: Open text stream, reporting date, console flag
# Outputs: One header line plus one line per data point
# Dependencies: sys, typing, base, logging_utils
# Usage: sink = FileDiagnosticSink(f, date, console_output=True)
#
# Changelog:
#   2026-09-02: Initial FileDiagnosticSink
#   2026-09-11: Console echo goes to an injectable stream (defaults to stdout)
# ============================================================================

import sys
from datetime import datetime
from typing import Optional, TextIO

from FundDiagnostics.logging_utils import get_logger
from FundDiagnostics.sinks.base import DiagnosticSink

logger = get_logger(__name__)

HEADER_LINE = '"Date";"Variable";"Value"'


class FileDiagnosticSink(DiagnosticSink):
    """
    Sink that appends diagnostics to an open text stream.

    File format::

        "Date";"Variable";"Value"
        "2026-09-02T12:00:00";"SCC-2010-1prtp";12.345678901234567

    The header is written by the constructor, so a freshly built sink has
    already produced one line.
    """

    def __init__(
        self,
        stream: TextIO,
        date: datetime,
        console_output: bool = False,
        console: Optional[TextIO] = None,
    ):
        """
        Initialize file sink and write the header line.

        Args:
            stream: Already-open writable text stream (not closed by the sink)
            date: Reporting date written on every line
            console_output: If True, also echo each data point to the console
            console: Console stream for the echo (default: sys.stdout)
        """
        super().__init__(date)
        self._stream = stream
        self.console_output = console_output
        self._console = console

        self._stream.write(HEADER_LINE + "\n")
        logger.info(f"FileDiagnosticSink initialized (date={self.timestamp_text}, console={console_output})")

    def write_data_point(self, variable_name: str, value: float) -> None:
        """
        Append one data line and optionally echo it to the console.

        Args:
            variable_name: Label of the sweep cell
            value: Diagnostic value, formatted with 15 decimals
        """
        try:
            self._stream.write(f'"{self.timestamp_text}";"{variable_name}";{value:.15f}\n')
        except Exception:
            logger.exception(f"Failed to write data point {variable_name}")
            raise
        logger.debug(f"Data point written: {variable_name}={value!r}")

        if self.console_output:
            console = self._console if self._console is not None else sys.stdout
            print(f"{variable_name:<20} {value:10.2f}", file=console)

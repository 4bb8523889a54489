# ============================================================================
# FundDiagnostics - Sinks Package
#
# Purpose: Output backends for diagnostic data points
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from FundDiagnostics.sinks import DiagnosticSink, FileDiagnosticSink
#
# Changelog:
#   2026-09-02: Initial sinks package (file and database backends)
# ============================================================================

from FundDiagnostics.sinks.base import DiagnosticSink
from FundDiagnostics.sinks.database_sink import DEFAULT_TABLE, DatabaseDiagnosticSink, create_table
from FundDiagnostics.sinks.file_sink import HEADER_LINE, FileDiagnosticSink

__all__ = [
    "DiagnosticSink",
    "FileDiagnosticSink",
    "DatabaseDiagnosticSink",
    "DEFAULT_TABLE",
    "HEADER_LINE",
    "create_table",
]

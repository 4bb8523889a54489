# ============================================================================
# FundDiagnostics - Package Initialization
#
# Purpose: Package-level exports and version information
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from FundDiagnostics import DiagnosticRunner, FileDiagnosticSink
#
# Changelog:
#   2026-09-02: Initial package setup
# ============================================================================

__version__ = "0.1.0"
__license__ = "MIT"

from FundDiagnostics.computation import MarginalGas, SweepCell
from FundDiagnostics.config import Config
from FundDiagnostics.runner import DiagnosticRunner
from FundDiagnostics.sinks.base import DiagnosticSink
from FundDiagnostics.sinks.database_sink import DatabaseDiagnosticSink
from FundDiagnostics.sinks.file_sink import FileDiagnosticSink

__all__ = [
    "__version__",
    "Config",
    "DiagnosticRunner",
    "DiagnosticSink",
    "FileDiagnosticSink",
    "DatabaseDiagnosticSink",
    "MarginalGas",
    "SweepCell",
]

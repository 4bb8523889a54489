# ============================================================================
# FundDiagnostics - Utils Package
#
# Purpose: Shared utility functions
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from FundDiagnostics.utils import get_reporting_date
#
# Changelog:
#   2026-09-02: Initial utils package
# ============================================================================

from FundDiagnostics.utils.time import format_timestamp, get_reporting_date, parse_reporting_date

__all__ = ["format_timestamp", "get_reporting_date", "parse_reporting_date"]

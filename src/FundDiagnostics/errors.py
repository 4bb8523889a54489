# ============================================================================
# FundDiagnostics - Error Classes
#
# Purpose: Custom exception hierarchy for the package
# Inputs: Error messages and context
# Outputs: Structured exceptions
# Dependencies: None
# Usage: raise ParameterLoadError("Failed to load parameters")
#
# Changelog:
#   2026-09-02: Initial error classes
# ============================================================================

from typing import Optional


class FundDiagnosticsError(Exception):
    """Base exception for all FundDiagnostics errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error information
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """String representation."""
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ConfigurationError(FundDiagnosticsError):
    """Raised when configuration is invalid or missing."""

    pass


class ParameterLoadError(FundDiagnosticsError):
    """Raised when the calibrated parameter set cannot be loaded."""

    pass


class SinkError(FundDiagnosticsError):
    """Raised when a sink transport cannot be opened."""

    pass

# ============================================================================
# FundDiagnostics - Time Utilities
#
# Purpose: Reporting-date helpers shared by the CLI and sinks
# Inputs: None, or ISO-8601 text
# Outputs: datetime objects / timestamp text
# Dependencies: datetime
# Usage: date = get_reporting_date()
#
# Changelog:
#   2026-09-02: Initial time utilities
#   2026-09-09: Added format_timestamp so both sinks render dates identically
# ============================================================================

from datetime import datetime, timezone


def get_reporting_date() -> datetime:
    """
    Get the current UTC time as a naive datetime with second precision.

    Returns:
        datetime suitable as the fixed "as-of" date of a reporting session
    """
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def parse_reporting_date(text: str) -> datetime:
    """
    Parse an ISO-8601 date or date-time (e.g. "2026-09-02" or "2026-09-02T12:00:00").

    Raises:
        ValueError: If the text is not a valid ISO-8601 date
    """
    return datetime.fromisoformat(text.strip())


def format_timestamp(date: datetime) -> str:
    """Render a reporting date as e.g. "2026-09-02T12:00:00"."""
    return date.isoformat(timespec="seconds")

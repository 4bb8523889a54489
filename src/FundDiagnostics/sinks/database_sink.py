# ============================================================================
# FundDiagnostics - Database Sink
#
# Purpose: Insert diagnostics into a relational table via DB-API 2.0
# Inputs: Open connection, reporting date
# Outputs: One row per data point in the diagnostics table
# Dependencies: sqlite3 (default engine), base, logging_utils
# Usage: sink = DatabaseDiagnosticSink(conn, date); sink.write_data_point(...)
#
# Changelog:
#   2026-09-02: Initial DatabaseDiagnosticSink (sqlite3)
#   2026-09-16: Placeholder styles for other DB-API drivers (named, format, pyformat)
# ============================================================================

from datetime import datetime
from typing import Any, Dict, Tuple, Union

from FundDiagnostics.logging_utils import get_logger
from FundDiagnostics.sinks.base import DiagnosticSink

logger = get_logger(__name__)

DEFAULT_TABLE = "FundLongtermDiagnosticOutput"

# DB-API paramstyle -> VALUES clause
_PLACEHOLDERS = {
    "qmark": "?, ?, ?",
    "named": ":date, :variableName, :value",
    "format": "%s, %s, %s",
    "pyformat": "%(date)s, %(variableName)s, %(value)s",
}

# value is nullable: SQLite stores NaN as NULL
_CREATE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    date TEXT NOT NULL,
    variableName TEXT NOT NULL,
    value REAL
)
"""


def create_table(connection: Any, table: str = DEFAULT_TABLE) -> None:
    """
    Create the diagnostics table if it does not exist.

    Args:
        connection: Open DB-API connection
        table: Table name
    """
    cursor = connection.cursor()
    try:
        cursor.execute(_CREATE_SQL.format(table=table))
    finally:
        cursor.close()


class DatabaseDiagnosticSink(DiagnosticSink):
    """
    Sink that inserts one row per data point into ``(date, variableName, value)``.

    The sink never commits or rolls back; transaction policy belongs to whoever
    owns the connection. With an autocommit connection every write is its own
    unit of work.
    """

    def __init__(
        self,
        connection: Any,
        date: datetime,
        table: str = DEFAULT_TABLE,
        paramstyle: str = "qmark",
    ):
        """
        Initialize database sink.

        Args:
            connection: Already-open DB-API 2.0 connection (not closed by the sink)
            date: Reporting date stored on every row
            table: Target table name
            paramstyle: Placeholder style of the driver (qmark, named, format, pyformat)

        Raises:
            ValueError: If paramstyle is not supported
        """
        if paramstyle not in _PLACEHOLDERS:
            raise ValueError(f"Unsupported paramstyle: {paramstyle}")
        super().__init__(date)
        self._connection = connection
        self.table = table
        self.paramstyle = paramstyle
        self._sql = f"INSERT INTO {table} (date, variableName, value) VALUES ({_PLACEHOLDERS[paramstyle]})"
        logger.info(f"DatabaseDiagnosticSink initialized: table={table} (date={self.timestamp_text})")

    def _parameters(self, variable_name: str, value: float) -> Union[Tuple[Any, ...], Dict[str, Any]]:
        if self.paramstyle in ("named", "pyformat"):
            return {"date": self.timestamp_text, "variableName": variable_name, "value": value}
        return (self.timestamp_text, variable_name, value)

    def write_data_point(self, variable_name: str, value: float) -> None:
        """
        Insert one row with bound parameters.

        Args:
            variable_name: Label of the sweep cell
            value: Diagnostic value
        """
        cursor = self._connection.cursor()
        try:
            cursor.execute(self._sql, self._parameters(variable_name, value))
        except Exception:
            logger.exception(f"Failed to insert data point {variable_name} into {self.table}")
            raise
        finally:
            cursor.close()
        logger.debug(f"Row inserted: {variable_name}={value!r}")

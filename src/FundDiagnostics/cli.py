# ============================================================================
# FundDiagnostics - Command Line Interface
#
# Purpose: CLI entry point for diagnostic runs
# Inputs: Command-line arguments
# Outputs: Diagnostic file or database rows; optional console echo
# Dependencies: argparse, sqlite3, config, runner, sinks
# Usage: python -m FundDiagnostics.cli run --evaluator mymodel:scc --sink sqlite
#
# Changelog:
#   2026-09-02: Initial CLI with 'run' command
#   2026-09-09: Added 'schedule' command and --cache-parameters
#   2026-09-16: sqlite connection opened in autocommit mode so every data point
#               is its own unit of work
# ============================================================================

import argparse
import sqlite3
import sys
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path

from FundDiagnostics import __version__
from FundDiagnostics.computation import resolve_callable
from FundDiagnostics.config import Config
from FundDiagnostics.errors import ConfigurationError, FundDiagnosticsError, SinkError
from FundDiagnostics.logging_utils import get_logger, setup_logging
from FundDiagnostics.runner import DiagnosticRunner, schedule_for_level
from FundDiagnostics.sinks.base import DiagnosticSink
from FundDiagnostics.sinks.database_sink import DatabaseDiagnosticSink, create_table
from FundDiagnostics.sinks.file_sink import FileDiagnosticSink
from FundDiagnostics.utils.time import get_reporting_date, parse_reporting_date

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="funddiag",
        description="Long-term diagnostics for the social cost of greenhouse gases",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser(
        "run",
        help="Run a diagnostic level and write the results to a sink",
    )
    run_parser.add_argument(
        "--level",
        type=int,
        default=None,
        help="Diagnostic level (default from config: 1)",
    )
    run_parser.add_argument(
        "--sink",
        type=str,
        choices=["file", "sqlite"],
        default=None,
        help="Sink: file (semicolon-delimited text) or sqlite (database table).",
    )
    run_parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output file (file sink) or database path (sqlite sink)",
    )
    run_parser.add_argument(
        "--table",
        type=str,
        default=None,
        help="Target table for the sqlite sink (default: FundLongtermDiagnosticOutput)",
    )
    run_parser.add_argument(
        "--echo",
        action="store_true",
        help="Also print each data point to the console (file sink only)",
    )
    run_parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Reporting date, ISO-8601 (default: now, UTC)",
    )
    run_parser.add_argument(
        "--evaluator",
        type=str,
        default=None,
        metavar="MODULE:ATTR",
        help="Marginal damage model callable",
    )
    run_parser.add_argument(
        "--parameter-loader",
        type=str,
        default=None,
        metavar="MODULE:ATTR",
        help="Parameter loader callable (default: YAML parameter file)",
    )
    run_parser.add_argument(
        "--parameters",
        type=str,
        default=None,
        help="Parameter source passed to the loader",
    )
    run_parser.add_argument(
        "--cache-parameters",
        action="store_true",
        help="Load parameters once per run instead of once per sweep cell",
    )
    run_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to custom config YAML file",
    )
    run_parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    schedule_parser = subparsers.add_parser(
        "schedule",
        help="List the variable names a diagnostic level produces, in order",
    )
    schedule_parser.add_argument(
        "--level",
        type=int,
        default=1,
        help="Diagnostic level (default: 1)",
    )

    return parser


def _load_config(args: argparse.Namespace) -> Config:
    """Load config and apply CLI overrides."""
    config = Config.from_yaml(args.config) if args.config else Config.from_default()

    if args.level is not None:
        config.run.level = args.level
    if args.date:
        config.run.date = args.date
    if args.cache_parameters:
        config.run.cache_parameters = True
    if args.evaluator:
        config.model.evaluator = args.evaluator
    if args.parameter_loader:
        config.model.parameter_loader = args.parameter_loader
    if args.parameters:
        config.model.parameter_source = args.parameters
    if args.sink:
        config.sink.type = args.sink
    if args.out:
        if config.sink.type == "sqlite":
            config.sink.sqlite_path = args.out
        else:
            config.sink.output_path = args.out
    if args.table:
        config.sink.table = args.table
    if args.echo:
        config.sink.console_output = True
    if args.log_level:
        config.logging.level = args.log_level

    return config


def _open_sink(config: Config, date: datetime, stack: ExitStack) -> DiagnosticSink:
    """
    Open the transport named by the config and wrap it in a sink.

    The transport is registered on ``stack`` so it is closed when the run ends.

    Raises:
        SinkError: If the file or database cannot be opened
    """
    if config.sink.type == "file":
        path = Path(config.sink.output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            stream = stack.enter_context(open(path, "w", encoding="utf-8", newline=""))
        except OSError as e:
            raise SinkError(f"Cannot open output file {path}", details=str(e)) from e
        logger.info(f"Writing diagnostics to {path}")
        return FileDiagnosticSink(stream, date, console_output=config.sink.console_output)

    if config.sink.type == "sqlite":
        path = Path(config.sink.sqlite_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(path, isolation_level=None)
            stack.callback(connection.close)
            create_table(connection, config.sink.table)
        except (OSError, sqlite3.Error) as e:
            raise SinkError(f"Cannot open database {path}", details=str(e)) from e
        logger.info(f"Writing diagnostics to {path} (table={config.sink.table})")
        return DatabaseDiagnosticSink(connection, date, table=config.sink.table)

    raise ConfigurationError(f"Unknown sink type: {config.sink.type}")


def run_command(args: argparse.Namespace) -> int:
    """
    Execute the 'run' command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        config = _load_config(args)
        setup_logging(config.logging.level, config.logging.format)

        logger.info(f"Starting FundDiagnostics v{__version__}")

        if not config.model.evaluator:
            raise ConfigurationError("No evaluator configured. Pass --evaluator MODULE:ATTR or set model.evaluator.")
        evaluator = resolve_callable(config.model.evaluator)
        loader = resolve_callable(config.model.parameter_loader)

        if config.run.date:
            try:
                date = parse_reporting_date(config.run.date)
            except ValueError as e:
                raise ConfigurationError(f"Invalid reporting date: {config.run.date!r}", details=str(e)) from e
        else:
            date = get_reporting_date()

        runner = DiagnosticRunner(
            evaluator,
            loader,
            config.model.parameter_source,
            cache_parameters=config.run.cache_parameters,
        )

        with ExitStack() as stack:
            sink = _open_sink(config, date, stack)
            runner.run(sink, config.run.level)

        output = config.sink.output_path if config.sink.type == "file" else config.sink.sqlite_path
        print("\n" + "=" * 60)
        print("✓ Diagnostics Complete")
        print("=" * 60)
        print(f"Level:           {config.run.level}")
        print(f"Data points:     {len(schedule_for_level(config.run.level))}")
        print(f"Output:          {output}")
        print("=" * 60 + "\n")

        return 0

    except FundDiagnosticsError as e:
        logger.error(f"Diagnostics error: {e}")
        print(f"\n✗ Error: {e}\n", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error during diagnostics run")
        print(f"\n✗ Unexpected error: {e}\n", file=sys.stderr)
        return 2


def schedule_command(args: argparse.Namespace) -> int:
    """
    Print the variable names of a diagnostic level in execution order.

    Returns:
        Exit code
    """
    cells = schedule_for_level(args.level)
    if not cells:
        print(f"Level {args.level} has no scheduled data points")
        return 0

    print(f"{'#':>3s}  {'Variable':24s} {'Gas':5s} {'PRTP':>6s}  Equity weights")
    for i, cell in enumerate(cells, start=1):
        ew = "yes" if cell.equity_weights else "no"
        print(f"{i:3d}  {cell.variable_name:24s} {cell.gas.value:5s} {cell.prtp:6.2f}  {ew}")
    return 0


def main() -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "run":
        return run_command(args)
    if args.command == "schedule":
        return schedule_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

# ============================================================================
# FundDiagnostics - Diagnostic Runner
#
# Purpose: Execute the fixed sweep schedule of a diagnostic level and forward
#          every result to a sink
# Inputs: DiagnosticSink, level number
# Outputs: One write_data_point call per scheduled cell
# Dependencies: computation, sinks.base, logging_utils
# Usage: DiagnosticRunner(evaluate, load_parameter_file, "params.yaml").run(sink, 1)
#
# Changelog:
#   2026-09-02: Initial runner with level 1 schedule
#   2026-09-09: Optional per-run parameter cache
# ============================================================================

from typing import Any, Dict, Optional, Tuple

from FundDiagnostics.computation import MarginalDamageEvaluator, MarginalGas, ParameterLoader, SweepCell
from FundDiagnostics.logging_utils import get_logger
from FundDiagnostics.sinks.base import DiagnosticSink

logger = get_logger(__name__)

REPORT_YEAR = 2010


def _cells(*rows: Tuple[MarginalGas, float, bool]) -> Tuple[SweepCell, ...]:
    return tuple(SweepCell(gas, prtp, ew, REPORT_YEAR) for gas, prtp, ew in rows)


# Order matters: console echo and downstream consumers rely on it.
LEVEL_SCHEDULES: Dict[int, Tuple[SweepCell, ...]] = {
    1: _cells(
        (MarginalGas.C, 0.0, False),
        (MarginalGas.C, 0.01, False),
        (MarginalGas.C, 0.03, False),
        (MarginalGas.C, 0.0, True),
        (MarginalGas.C, 0.01, True),
        (MarginalGas.C, 0.03, True),
        (MarginalGas.CH4, 0.01, False),
        (MarginalGas.CH4, 0.01, True),
        (MarginalGas.N2O, 0.01, False),
        (MarginalGas.N2O, 0.01, True),
        (MarginalGas.SF6, 0.01, False),
        (MarginalGas.SF6, 0.01, True),
    ),
    2: (),
    3: (),
}


def schedule_for_level(level: int) -> Tuple[SweepCell, ...]:
    """Cells of a diagnostic level in execution order; empty for unknown levels."""
    return LEVEL_SCHEDULES.get(level, ())


class DiagnosticRunner:
    """
    Runs a diagnostic level against the external marginal-damage model.

    For every cell the runner obtains the calibrated parameters, evaluates the
    model and hands ``(cell.variable_name, value)`` to the sink. Results are
    forwarded untouched: no validation, filtering or aggregation. Any exception
    aborts the remaining cells.
    """

    def __init__(
        self,
        evaluator: MarginalDamageEvaluator,
        parameter_loader: ParameterLoader,
        parameter_source: str,
        cache_parameters: bool = False,
    ):
        """
        Initialize runner.

        Args:
            evaluator: External model returning the social cost of a gas
            parameter_loader: Returns the best-guess parameter set for a source
            parameter_source: Locator passed to parameter_loader
            cache_parameters: If True, load parameters once per run() instead of once per cell
        """
        self.evaluator = evaluator
        self.parameter_loader = parameter_loader
        self.parameter_source = parameter_source
        self.cache_parameters = cache_parameters

    def run(self, sink: DiagnosticSink, level: int) -> None:
        """
        Execute the schedule of ``level`` and write each result to ``sink``.

        Unknown levels write nothing and do not raise.

        Args:
            sink: Destination of the data points
            level: Diagnostic level number
        """
        if level not in LEVEL_SCHEDULES:
            logger.warning(f"Unknown diagnostic level {level}; nothing to run")
            return

        cells = LEVEL_SCHEDULES[level]
        if not cells:
            logger.info(f"Diagnostic level {level} has an empty schedule")
            return

        logger.info(f"Running diagnostic level {level} ({len(cells)} cells)")
        cached: Optional[Any] = None
        have_cached = False

        for index, cell in enumerate(cells, start=1):
            if self.cache_parameters and have_cached:
                parameters = cached
            else:
                parameters = self.parameter_loader(self.parameter_source)
                if self.cache_parameters:
                    cached, have_cached = parameters, True

            value = self.evaluator(cell.gas, cell.report_year, cell.prtp, cell.equity_weights, parameters)
            logger.debug(f"[{index}/{len(cells)}] {cell.variable_name} = {value!r}")
            sink.write_data_point(cell.variable_name, value)

        logger.info(f"Diagnostic level {level} complete")

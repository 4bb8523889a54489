# ============================================================================
# FundDiagnostics - Test Configuration and Fixtures
#
# Purpose: Shared pytest fixtures for testing
# Inputs: None
# Outputs: Fixtures for use in tests
# Dependencies: pytest, datetime
# Usage: pytest tests/ (fixtures are automatically available)
#
# Changelog:
#   2026-09-02: Initial fixtures: reporting date, stub model, recording sink
# ============================================================================

from datetime import datetime
from typing import Any, List, Tuple

import pytest

from FundDiagnostics.computation import MarginalGas
from FundDiagnostics.sinks.base import DiagnosticSink

_GAS_OFFSET = {MarginalGas.C: 100.0, MarginalGas.CH4: 2000.0, MarginalGas.N2O: 30000.0, MarginalGas.SF6: 400000.0}


def stub_evaluate(gas: MarginalGas, report_year: int, prtp: float, equity_weights: bool, parameters: Any) -> float:
    """Deterministic stand-in for the marginal damage model."""
    return _GAS_OFFSET[gas] / (1.0 + 10.0 * prtp) + (0.5 if equity_weights else 0.0) + report_year * 1e-4


class RecordingSink(DiagnosticSink):
    """Sink that keeps every call in memory."""

    def __init__(self, date: datetime):
        super().__init__(date)
        self.points: List[Tuple[str, float]] = []

    def write_data_point(self, variable_name: str, value: float) -> None:
        self.points.append((variable_name, value))


@pytest.fixture
def reporting_date() -> datetime:
    """Fixed reporting date shared by all records of a test."""
    return datetime(2026, 9, 2, 12, 30, 0)


@pytest.fixture
def recording_sink(reporting_date):
    return RecordingSink(reporting_date)


@pytest.fixture
def stub_loader():
    """Parameter loader that counts its calls."""
    calls: List[str] = []

    def load(source: str) -> dict:
        calls.append(source)
        return {"source": source, "eta": 1.0}

    load.calls = calls  # type: ignore[attr-defined]
    return load


@pytest.fixture
def stub_evaluator():
    return stub_evaluate


@pytest.fixture
def make_recording_sink(reporting_date):
    """Factory for additional recording sinks sharing the test date."""

    def make() -> RecordingSink:
        return RecordingSink(reporting_date)

    return make

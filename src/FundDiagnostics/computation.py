# ============================================================================
# FundDiagnostics - Computation Interfaces
#
# Purpose: Sweep cell definition and the interfaces of the external
#          marginal-damage model and parameter source
# Inputs: Gas kind, discount rate, equity-weighting flag, report year
# Outputs: Variable names; protocols for evaluator / parameter loader
# Dependencies: pyyaml, importlib, dataclasses, enum
# Usage: cell = SweepCell(MarginalGas.C, 0.01, False, 2010); cell.variable_name
#
# Changelog:
#   2026-09-02: Initial sweep cell and gas definitions
#   2026-09-09: Added YAML parameter loader and "module:attr" resolution
# ============================================================================

import importlib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Protocol

import yaml  # type: ignore[import-untyped]

from FundDiagnostics.errors import ConfigurationError, ParameterLoadError
from FundDiagnostics.logging_utils import get_logger

logger = get_logger(__name__)


class MarginalGas(Enum):
    """Greenhouse gas receiving the marginal emission pulse."""

    C = "C"
    CH4 = "CH4"
    N2O = "N2O"
    SF6 = "SF6"

    @property
    def label(self) -> str:
        """Variable-name prefix, e.g. "SCC" for carbon."""
        return _GAS_LABELS[self]


_GAS_LABELS = {
    MarginalGas.C: "SCC",
    MarginalGas.CH4: "SCCH4",
    MarginalGas.N2O: "SCN2O",
    MarginalGas.SF6: "SCSF6",
}


@dataclass(frozen=True)
class SweepCell:
    """One combination of gas, discount rate and equity weighting."""

    gas: MarginalGas
    prtp: float
    equity_weights: bool
    report_year: int

    @property
    def variable_name(self) -> str:
        """
        Deterministic label of the cell, e.g. "SCCH4-2010-1prtp-AvgEw".

        The rate is written as an integer percentage.
        """
        name = f"{self.gas.label}-{self.report_year}-{round(self.prtp * 100)}prtp"
        if self.equity_weights:
            name += "-AvgEw"
        return name


class MarginalDamageEvaluator(Protocol):
    """Social cost of a gas for one sweep cell. Assumed pure, possibly slow."""

    def __call__(
        self,
        gas: MarginalGas,
        report_year: int,
        prtp: float,
        equity_weights: bool,
        parameters: Any,
    ) -> float: ...


class ParameterLoader(Protocol):
    """Produces the best-guess calibrated parameter set from a source locator."""

    def __call__(self, source: str) -> Any: ...


def load_parameter_file(source: str) -> Dict[str, Any]:
    """
    Load best-guess parameters from a YAML mapping.

    Args:
        source: Path to a YAML file whose top level is a mapping

    Returns:
        Parameter mapping

    Raises:
        ParameterLoadError: If the file is missing, unreadable or not a mapping
    """
    path = Path(source)
    if not path.exists():
        raise ParameterLoadError(f"Parameter file not found: {source}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ParameterLoadError(f"Failed to read parameter file {source}", details=str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParameterLoadError(f"Parameter file {source} must contain a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded {len(data)} parameters from {source}")
    return data


def resolve_callable(target: str) -> Callable[..., Any]:
    """
    Import a callable named as "package.module:attribute".

    Raises:
        ConfigurationError: If the target is malformed, the import fails or the
            attribute is not callable
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Expected 'module:attribute', got: {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module {module_name!r}", details=str(e)) from e

    obj: Any = module
    for part in attr.split("."):
        if not hasattr(obj, part):
            raise ConfigurationError(f"Module {module_name!r} has no attribute {attr!r}")
        obj = getattr(obj, part)

    if not callable(obj):
        raise ConfigurationError(f"{target!r} is not callable")
    return obj

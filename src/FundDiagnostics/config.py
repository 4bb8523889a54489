# ============================================================================
# FundDiagnostics - Configuration Management
#
# Purpose: Load and manage configuration from YAML, CLI args, and env vars
# Inputs: YAML files, environment variables
# Outputs: Config model with all settings
# Dependencies: pyyaml, pydantic, pathlib
# Usage: config = Config.from_default() or Config.from_yaml("path.yaml")
#
# Changelog:
#   2026-09-02: Initial configuration system
#   2026-09-16: Added sink.table for non-default diagnostics tables
# ============================================================================

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field


class RunConfig(BaseModel):
    """Which diagnostic level to run and when it is reported."""

    level: int = 1
    date: Optional[str] = None  # ISO-8601; None = now (UTC)
    cache_parameters: bool = False


class ModelConfig(BaseModel):
    """External model hooks, given as "module:attribute"."""

    evaluator: Optional[str] = None
    parameter_loader: str = "FundDiagnostics.computation:load_parameter_file"
    parameter_source: str = "data/parameters-base.yaml"


class SinkConfig(BaseModel):
    """Sink configuration."""

    type: Literal["file", "sqlite"] = "file"
    output_path: str = "runs/longterm-diagnostics.csv"
    sqlite_path: str = "runs/diagnostics.db"
    table: str = "FundLongtermDiagnosticOutput"
    console_output: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config(BaseModel):
    """Root configuration object."""

    run: RunConfig = Field(default_factory=RunConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    sink: SinkConfig = Field(default_factory=SinkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """
        Load configuration from a YAML file with environment variable overrides.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        data = cls._apply_env_overrides(data)

        return cls(**data)

    @classmethod
    def from_default(cls) -> "Config":
        """
        Load configuration from the default config file, or built-in defaults.

        Returns:
            Config instance
        """
        package_root = Path(__file__).parent.parent.parent
        default_config = package_root / "configs" / "default.yaml"

        if default_config.exists():
            return cls.from_yaml(str(default_config))
        return cls(**cls._apply_env_overrides(cls().model_dump()))

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern FUNDDIAG_<SECTION>_<KEY>=value.
        Keys may contain underscores, so they are matched against the known
        fields of each section rather than split naively.

        Examples:
            FUNDDIAG_SINK_TYPE=sqlite            → data["sink"]["type"]
            FUNDDIAG_RUN_CACHE_PARAMETERS=1      → data["run"]["cache_parameters"]

        Args:
            data: Configuration dictionary

        Returns:
            Updated configuration dictionary
        """
        prefix = "FUNDDIAG_"
        sections = {name: field.annotation for name, field in cls.model_fields.items()}

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            remainder = env_key[len(prefix) :].lower()
            for section, model in sections.items():
                section_prefix = section + "_"
                if not remainder.startswith(section_prefix):
                    continue

                key = remainder[len(section_prefix) :]
                if key in model.model_fields:  # type: ignore[union-attr]
                    section_data = data.setdefault(section, {})
                    if isinstance(section_data, dict):
                        section_data[key] = cls._parse_env_value(env_value)
                break

        return data

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """
        Parse environment variable value to appropriate type.

        Args:
            value: String value from environment

        Returns:
            Parsed value (str, int, float, or bool)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

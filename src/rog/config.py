from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

from rog.reporting.console import OutputType


class RogConfig(BaseModel):
    """Settings for a reporting run, usually read from rog.yaml."""

    model_config = ConfigDict(extra="forbid")

    output: OutputType = OutputType.FULL
    color: bool | None = None
    indent: str = "  "
    debug_log: str | None = None
    verbose: bool = False

    @field_validator("indent")
    @classmethod
    def indent_must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("indent must not be empty")
        return v

    @field_validator("debug_log")
    @classmethod
    def expand_debug_log(cls, v: str | None) -> str | None:
        """Expand ${VAR} references, failing on variables that are not set."""
        if v is None:
            return v
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"debug_log has a missing environment variable: {e}")


def load_config(path: Path) -> RogConfig:
    """Load and validate a config from a YAML file.

    A relative debug_log is resolved against the config file's directory.
    """
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(raw).__name__}")

    config = RogConfig(**raw)

    if config.debug_log is not None:
        debug_path = Path(config.debug_log)
        if not debug_path.is_absolute():
            config.debug_log = str((config_dir / debug_path).resolve())

    return config

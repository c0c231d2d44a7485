from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

from ccut.styling import ColorMode


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    color: ColorMode = ColorMode.ALWAYS
    name_filter: str | None = None
    timeout: float | None = None
    verbose: bool = False
    debug_log: str | None = None

    @field_validator("timeout")
    @classmethod
    def timeout_must_be_positive(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout must be greater than 0")
        return v

    @field_validator("name_filter")
    @classmethod
    def filter_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("name_filter must not be blank")
        return v

    def merged(self, **overrides: Any) -> RunConfig:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return self.model_validate({**self.model_dump(), **values})


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping")

    config = RunConfig(**raw)

    if config.debug_log:
        # ${VAR} references must be set unless they carry a default
        try:
            expanded = expandvars(config.debug_log, nounset=True)
        except Exception as e:
            raise ValueError(f"{path}: debug_log: {e}") from e
        debug_path = Path(expanded)
        if not debug_path.is_absolute():
            debug_path = (config_dir / debug_path).resolve()
        config.debug_log = str(debug_path)

    return config

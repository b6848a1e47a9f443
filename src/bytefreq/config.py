from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from bytefreq.mask.grain import Grain, parse_grain

CONFIG_KEYS = (
    "grain",
    "delimiter",
    "format",
    "pathdepth",
    "remove_array_numbers",
    "report",
    "seed",
    "log_level",
)


class ProfileConfig(BaseModel):
    grain: Grain = Grain.LOW_UNICODE
    delimiter: str = Field(default="|", min_length=1)
    format: Literal["tabular", "json"] = "tabular"
    pathdepth: int = Field(default=2, ge=0)
    remove_array_numbers: bool = False
    report: Literal["DQ", "CP"] = "DQ"
    seed: Optional[int] = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("grain", mode="before")
    @classmethod
    def _grain(cls, value: Any) -> Grain:
        return parse_grain(value if isinstance(value, str) else str(value))

    @field_validator("log_level", mode="before")
    @classmethod
    def _log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


def load_config(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(cfg).__name__}")
    unknown = sorted(set(cfg) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"config {path} has unknown keys: {', '.join(unknown)}")
    return cfg


def resolve_config(
    cli_values: dict[str, Any] | None,
    cfg: dict[str, Any] | None = None,
) -> ProfileConfig:
    """CLI values win over the config file, the file wins over defaults.

    A CLI value of None means "not given on the command line".
    """
    merged: dict[str, Any] = {}
    if cfg:
        merged.update({k: v for k, v in cfg.items() if v is not None})
    if cli_values:
        merged.update({k: v for k, v in cli_values.items() if v is not None})
    return ProfileConfig.model_validate(merged)

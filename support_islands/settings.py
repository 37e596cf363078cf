"""Load sampling options from config.toml."""

from __future__ import annotations

import math
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "config.toml"
CONFIG_SECTION = "support_islands"
DEFAULT_MAX_LENGTH_FOR_ONE_SUPPORT_POINT = 10.0
DEFAULT_START_DISTANCE = 5.0


@dataclass(frozen=True, slots=True)
class SampleConfig:
    """Options that decide how a skeleton is turned into support points."""

    # Islands whose longest path is shorter get a single point in its middle.
    max_length_for_one_support_point: float = DEFAULT_MAX_LENGTH_FOR_ONE_SUPPORT_POINT
    # Divides the leaf edge length to get the inset of the first point.
    start_distance: float = DEFAULT_START_DISTANCE

    def __post_init__(self) -> None:
        if not math.isfinite(self.max_length_for_one_support_point) or self.max_length_for_one_support_point < 0:
            raise ValueError("max_length_for_one_support_point must be a finite, non-negative number.")
        if not math.isfinite(self.start_distance) or self.start_distance <= 0:
            raise ValueError("start_distance must be a finite, positive number.")

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> SampleConfig:
        kwargs: dict[str, float] = {}
        for name in ("max_length_for_one_support_point", "start_distance"):
            if name not in values:
                continue
            try:
                kwargs[name] = float(values[name])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be a number, got {values[name]!r}.") from exc
        return cls(**kwargs)


def load_sample_config(path: Path | str | None = None) -> SampleConfig:
    """Return the sampling options from ``path`` (default: config.toml at the project root)."""

    config_path = Path(path) if path is not None else _project_root() / CONFIG_FILENAME
    if not config_path.is_file():
        if path is not None:
            raise FileNotFoundError(f"Could not find config file {config_path}")
        return SampleConfig()

    with config_path.open("rb") as handle:
        config = tomllib.load(handle)

    section = config.get(CONFIG_SECTION)
    if isinstance(section, dict):
        return SampleConfig.from_mapping(section)
    return SampleConfig()


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


__all__ = ["SampleConfig", "load_sample_config"]

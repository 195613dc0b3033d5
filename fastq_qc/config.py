"""Load fastq_qc configuration from a TOML file or pyproject.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import ConfigError


@dataclass(frozen=True)
class QualityThreshold:
    """A named high-quality cutoff: bases scoring >= ``score`` are high quality."""

    name: str
    score: int


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _default_thresholds() -> List[QualityThreshold]:
    return [QualityThreshold("q15", 15), QualityThreshold("q20", 20)]


@dataclass
class QCConfig:
    """Runtime configuration for a QC run."""

    # Phred offset subtracted from each quality character (Sanger / Illumina 1.8+)
    quality_offset: int = 33
    # Highest accepted decoded score; histograms have max_quality + 1 buckets
    max_quality: int = 41

    # Ordered high-quality thresholds; one tile histogram is kept per entry
    thresholds: List[QualityThreshold] = field(default_factory=_default_thresholds)
    # Tiles per read fraction; 200 gives 0.5% resolution
    tile_resolution: int = 200
    # Coverage points read off every threshold's curve
    coverage_percents: Tuple[int, ...] = (100, 95, 90)

    # Threshold whose 100% coverage defines "high-quality reads"
    high_quality_threshold: str = "q20"
    # Threshold whose 90% coverage complement defines "poor-quality reads"
    poor_quality_threshold: str = "q15"

    # Band edges for the per-base quality rollup: <15, 15-19, 20-29, 30+
    quality_bands: Tuple[int, ...] = (15, 20, 30)
    # Minimum-quality rollups: % of reads whose lowest score is >= each value
    min_quality_cutoffs: Tuple[int, ...] = (10, 15, 20)

    # Reported separately at the end of the alphabet table
    ambiguous_symbol: str = "N"

    def __post_init__(self) -> None:
        self.validate()

    @property
    def quality_buckets(self) -> int:
        return self.max_quality + 1

    def threshold(self, name: str) -> QualityThreshold:
        for th in self.thresholds:
            if th.name == name:
                return th
        raise ConfigError(f"unknown threshold name: {name!r}")

    def tile_for_percent(self, percent: int) -> int:
        """Integer tile index for a coverage percentage (exact by construction)."""
        return percent * self.tile_resolution // 100

    def _check_types(self) -> None:
        for key in ("quality_offset", "max_quality", "tile_resolution"):
            if not _is_int(getattr(self, key)):
                raise ConfigError(f"{key} must be an integer, got {getattr(self, key)!r}")
        for key in ("coverage_percents", "quality_bands", "min_quality_cutoffs"):
            values = getattr(self, key)
            if not isinstance(values, (list, tuple)) or not all(_is_int(v) for v in values):
                raise ConfigError(f"{key} must be a list of integers, got {values!r}")
        for th in self.thresholds:
            if not _is_int(th.score):
                raise ConfigError(f"threshold {th.name!r} must be an integer score")
        if not isinstance(self.ambiguous_symbol, str):
            raise ConfigError("ambiguous_symbol must be a string")

    def validate(self) -> None:
        self._check_types()
        if self.quality_offset < 0:
            raise ConfigError("quality_offset must be >= 0")
        if self.max_quality < 0:
            raise ConfigError("max_quality must be >= 0")
        if not self.thresholds:
            raise ConfigError("at least one quality threshold is required")
        names = [th.name for th in self.thresholds]
        if len(set(names)) != len(names):
            raise ConfigError(f"duplicate threshold names: {names}")
        for th in self.thresholds:
            if not 0 <= th.score <= self.max_quality:
                raise ConfigError(
                    f"threshold {th.name!r} score {th.score} outside 0..{self.max_quality}"
                )
        if self.tile_resolution <= 0:
            raise ConfigError("tile_resolution must be positive")
        for pct in self.coverage_percents:
            if not 0 <= pct <= 100:
                raise ConfigError(f"coverage percent {pct} outside 0..100")
            if (pct * self.tile_resolution) % 100:
                raise ConfigError(
                    f"tile_resolution {self.tile_resolution} does not map {pct}% onto an exact tile"
                )
        high = self.threshold(self.high_quality_threshold)
        poor = self.threshold(self.poor_quality_threshold)
        # High- and poor-quality reads must be disjoint categories
        if high.score < poor.score:
            raise ConfigError(
                f"high_quality_threshold {high.name!r} ({high.score}) is below "
                f"poor_quality_threshold {poor.name!r} ({poor.score})"
            )
        if not {100, 95, 90}.issubset(self.coverage_percents):
            raise ConfigError("coverage_percents must include 100, 95 and 90")
        if list(self.quality_bands) != sorted(set(self.quality_bands)):
            raise ConfigError("quality_bands must be strictly increasing")
        for edge in self.quality_bands:
            if not 0 < edge <= self.max_quality:
                raise ConfigError(f"quality band edge {edge} outside 1..{self.max_quality}")
        for cut in self.min_quality_cutoffs:
            if not 0 <= cut <= self.max_quality:
                raise ConfigError(f"min_quality cutoff {cut} outside 0..{self.max_quality}")
        if len(self.ambiguous_symbol) != 1:
            raise ConfigError("ambiguous_symbol must be a single character")


def _read_toml(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"cannot parse {path}: {exc}") from exc


def _parse_thresholds(raw) -> List[QualityThreshold]:
    # Accept {q15 = 15, q20 = 20} or [15, 20]
    if isinstance(raw, dict):
        items = list(raw.items())
    elif isinstance(raw, list):
        items = [(f"q{v}", v) for v in raw]
    else:
        raise ConfigError("thresholds must be a table or a list of scores")
    out = []
    for name, score in items:
        if not _is_int(score):
            raise ConfigError(f"threshold {name!r} must be an integer score")
        out.append(QualityThreshold(str(name), score))
    return out


def config_from_dict(d: dict) -> QCConfig:
    """Build a config from a plain mapping, ignoring unknown keys."""
    valid = set(QCConfig.__dataclass_fields__)
    kwargs = {}
    for key, val in d.items():
        if key not in valid:
            continue
        if key == "thresholds":
            val = _parse_thresholds(val)
        elif isinstance(val, list):
            val = tuple(val)
        kwargs[key] = val
    return QCConfig(**kwargs)


def load_config(path: Optional[Path] = None) -> QCConfig:
    """Load config from ``path``; defaults when ``path`` is None.

    A ``pyproject.toml`` is read from its ``[tool.fastq_qc]`` table, any other
    file from a top-level ``[fastq_qc]`` table (or the top level itself).
    """
    if path is None:
        return QCConfig()
    path = Path(path)
    data = _read_toml(path)
    if path.name == "pyproject.toml":
        section = data.get("tool", {}).get("fastq_qc", {})
    else:
        section = data.get("fastq_qc", data)
    return config_from_dict(section)


__all__ = ["QualityThreshold", "QCConfig", "config_from_dict", "load_config"]

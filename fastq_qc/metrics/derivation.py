"""Fold raw read histograms into the read-only QC summary.

``derive_snapshot`` is a pure function of a finished ``ReadStatsAggregator``:
calling it twice on the same aggregator returns equal snapshots. The returned
``QCSnapshot`` is the only thing report writers and plots consume.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from ..config import QCConfig
from ..utils import fraction, percent
from .aggregator import ReadStatsAggregator

__all__ = [
	"AlphabetEntry",
	"QualityBand",
	"CoverageSummary",
	"QCSnapshot",
	"derive_snapshot",
	"quality_bands",
	"coverage_curve",
]


@dataclass(frozen=True)
class AlphabetEntry:
	symbol: str
	count: int
	percent: float


@dataclass(frozen=True)
class QualityBand:
	"""Per-base quality rollup over scores in ``[low, high)``."""

	label: str
	low: int
	high: int
	count: int
	percent: float


@dataclass(frozen=True)
class CoverageSummary:
	"""Named coverage values (fractions of scored reads, 0..1).

	high_quality_reads : every base >= the high-quality threshold
	high_at_95 / high_at_90 : >= 95% / 90% of bases >= the high-quality threshold
	poor_at_90 : >= 90% of bases >= the poor-quality threshold
	poor_quality_reads : 1 - poor_at_90 (more than 10% of bases below it)
	medium_quality_reads : everything that is neither high nor poor
	"""

	high_threshold: str
	poor_threshold: str
	high_quality_reads: float
	high_at_95: float
	high_at_90: float
	poor_at_90: float
	poor_quality_reads: float
	medium_quality_reads: float


@dataclass(frozen=True)
class QCSnapshot:
	"""Finished, read-only statistics for one FASTQ input."""

	total_reads: int
	total_bases: int
	min_length: int
	max_length: int
	avg_length: float
	scored_reads: int
	empty_reads: int
	gc_undefined_reads: int
	gc_content: float
	alphabet: Dict[str, int]
	alphabet_table: Tuple[AlphabetEntry, ...]
	gc_histogram: Tuple[int, ...]
	base_quality: Tuple[int, ...]
	quality_bands: Tuple[QualityBand, ...]
	min_quality: Tuple[int, ...]
	min_quality_rollups: Dict[int, float]
	thresholds: Dict[str, int]
	tile_resolution: int
	tiles: Dict[str, Tuple[int, ...]]
	coverage_curves: Dict[str, Tuple[float, ...]]
	coverage_points: Dict[str, Dict[int, float]]
	coverage: CoverageSummary

	def coverage_at(self, threshold: str, tile: int) -> float:
		"""Fraction of scored reads whose high-quality tile is >= ``tile``."""
		curve = self.coverage_curves[threshold]
		if tile > self.tile_resolution:
			return 0.0
		return curve[max(tile, 0)]


def _band_label(low: int, high: int, max_quality: int) -> str:
	if low == 0:
		return f"<Q{high}"
	if high > max_quality:
		return f"Q{low}+"
	return f"Q{low}-Q{high - 1}"


def quality_bands(base_quality: List[int], edges: Tuple[int, ...], total_bases: int) -> Tuple[QualityBand, ...]:
	"""Sum the per-base histogram into bands split at ``edges``.

	With edges (15, 20, 30) and 42 buckets: <Q15, Q15-Q19, Q20-Q29, Q30+.
	"""
	bounds = [0, *edges, len(base_quality)]
	max_quality = len(base_quality) - 1
	bands = []
	for low, high in zip(bounds[:-1], bounds[1:]):
		count = int(sum(base_quality[low:high]))
		bands.append(QualityBand(_band_label(low, high, max_quality), low, high, count, percent(count, total_bases)))
	return tuple(bands)


def coverage_curve(tiles: List[int], scored_reads: int) -> Tuple[float, ...]:
	"""Cumulative-from-the-top fraction of reads at each tile.

	``curve[i]`` is the share of reads whose tile is >= i, so the curve is
	non-increasing in i and equals 1.0 at tile 0 whenever any read was binned.
	"""
	counts = np.asarray(tiles, dtype=np.int64)
	cumulative = np.cumsum(counts[::-1])[::-1]
	if scored_reads <= 0:
		return tuple(0.0 for _ in tiles)
	return tuple(float(c) / scored_reads for c in cumulative)


def _alphabet_table(alphabet: Dict[str, int], total_bases: int, ambiguous: str) -> Tuple[AlphabetEntry, ...]:
	rows = [
		AlphabetEntry(sym, cnt, percent(cnt, total_bases))
		for sym, cnt in sorted(alphabet.items())
		if sym != ambiguous and cnt > 0
	]
	if alphabet.get(ambiguous, 0) > 0:
		rows.append(AlphabetEntry(ambiguous, alphabet[ambiguous], percent(alphabet[ambiguous], total_bases)))
	return tuple(rows)


def derive_snapshot(agg: ReadStatsAggregator) -> QCSnapshot:
	"""Compute the QC summary from a fully scanned aggregator.

	Freezes the aggregator: the scan is over once derivation has run.
	"""
	agg.freeze()
	cfg: QCConfig = agg.config
	total_reads = agg.total_reads
	total_bases = agg.total_bases
	scored = agg.scored_reads
	alphabet = dict(agg.alphabet)

	min_q = agg.min_quality
	min_rollups = {cut: percent(sum(min_q[cut:]), scored) for cut in cfg.min_quality_cutoffs}

	curves = {name: coverage_curve(tiles, scored) for name, tiles in agg.tiles.items()}
	points = {
		name: {pct: curve[cfg.tile_for_percent(pct)] for pct in cfg.coverage_percents}
		for name, curve in curves.items()
	}
	high = points[cfg.high_quality_threshold]
	poor_at_90 = points[cfg.poor_quality_threshold][90]
	# No scored reads: every category is empty rather than 100% poor
	poor_reads = 1.0 - poor_at_90 if scored else 0.0
	medium_reads = max(0.0, 1.0 - high[100] - poor_reads) if scored else 0.0
	coverage = CoverageSummary(
		high_threshold=cfg.high_quality_threshold,
		poor_threshold=cfg.poor_quality_threshold,
		high_quality_reads=high[100],
		high_at_95=high[95],
		high_at_90=high[90],
		poor_at_90=poor_at_90,
		poor_quality_reads=poor_reads,
		medium_quality_reads=medium_reads,
	)

	return QCSnapshot(
		total_reads=total_reads,
		total_bases=total_bases,
		min_length=agg.min_length,
		max_length=agg.max_length,
		avg_length=round(fraction(total_bases, total_reads), 2),
		scored_reads=scored,
		empty_reads=agg.empty_reads,
		gc_undefined_reads=agg.gc_undefined_reads,
		gc_content=percent(alphabet.get('G', 0) + alphabet.get('C', 0), total_bases),
		alphabet=alphabet,
		alphabet_table=_alphabet_table(alphabet, total_bases, cfg.ambiguous_symbol),
		gc_histogram=tuple(agg.gc_histogram),
		base_quality=tuple(agg.base_quality),
		quality_bands=quality_bands(agg.base_quality, cfg.quality_bands, total_bases),
		min_quality=tuple(min_q),
		min_quality_rollups=min_rollups,
		thresholds={th.name: th.score for th in cfg.thresholds},
		tile_resolution=cfg.tile_resolution,
		tiles={name: tuple(t) for name, t in agg.tiles.items()},
		coverage_curves=curves,
		coverage_points=points,
		coverage=coverage,
	)

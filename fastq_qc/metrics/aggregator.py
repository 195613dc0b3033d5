"""Single-pass histogram aggregation over validated FASTQ records.

``ReadStatsAggregator`` owns every counter of a QC run. Each record is folded
in exactly once and then discarded, so memory stays constant no matter how
many reads are scanned: all histograms are fixed size, and the alphabet map
is bounded by the number of distinct symbols.

Degenerate reads follow one policy:
	- an empty read (zero-length sequence and quality) counts towards the
	  read total and the length statistics only; it is left out of the GC%,
	  minimum-quality and tile histograms and tallied in ``empty_reads``.
	- a non-empty read without any A/C/G/T base has no GC%; it is left out of
	  the GC% histogram only and tallied in ``gc_undefined_reads``.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional

from ..config import QCConfig
from ..errors import QualityScoreOutOfRange
from ..io.fastq_reader import FastqRecord, SimpleFastqReader
from ..utils import gc_percent, tile_index

__all__ = [
	"ReadStatsAggregator",
	"collect_read_stats",
	"GC_BUCKETS",
]

GC_BUCKETS = 101


class ReadStatsAggregator:
	"""Mutable histogram state for one input stream.

	Once ``freeze()`` has been called (the derivation step does this) no more
	records are accepted; scan a new input with a new aggregator.
	"""

	def __init__(self, config: Optional[QCConfig] = None):
		self.config = config or QCConfig()
		cfg = self.config
		self.total_reads = 0
		self.total_bases = 0
		self._min_length: Optional[int] = None
		self.max_length = 0
		self.empty_reads = 0
		self.gc_undefined_reads = 0
		self.alphabet: Counter = Counter()
		self.gc_histogram: List[int] = [0] * GC_BUCKETS
		self.base_quality: List[int] = [0] * cfg.quality_buckets
		self.min_quality: List[int] = [0] * cfg.quality_buckets
		self.tiles: Dict[str, List[int]] = {
			th.name: [0] * (cfg.tile_resolution + 1) for th in cfg.thresholds
		}
		self._frozen = False

	@property
	def min_length(self) -> int:
		return self._min_length if self._min_length is not None else 0

	@property
	def scored_reads(self) -> int:
		"""Reads binned in the minimum-quality and tile histograms."""
		return self.total_reads - self.empty_reads

	@property
	def frozen(self) -> bool:
		return self._frozen

	def freeze(self) -> None:
		self._frozen = True

	def _decode_quality(self, record: FastqRecord) -> Dict[int, int]:
		"""Map score -> count for one quality string, rejecting out-of-range codes."""
		offset = self.config.quality_offset
		max_q = self.config.max_quality
		scores: Dict[int, int] = {}
		for ch, n in Counter(record.quality).items():
			score = ord(ch) - offset
			if not 0 <= score <= max_q:
				raise QualityScoreOutOfRange(
					record.quality_line_number,
					f"quality code {ch!r} decodes to {score}, outside 0..{max_q}",
				)
			scores[score] = n
		return scores

	def add_record(self, record: FastqRecord) -> None:
		"""Fold one validated record into every histogram.

		Quality codes are decoded before anything is counted, so a rejected
		record leaves the state untouched.
		"""
		if self._frozen:
			raise RuntimeError("aggregator is frozen; start a new one for new input")
		scores = self._decode_quality(record)
		seq = record.sequence
		length = len(record)

		self.total_reads += 1
		self.total_bases += length
		if self._min_length is None or length < self._min_length:
			self._min_length = length
		if length > self.max_length:
			self.max_length = length

		if length == 0:
			self.empty_reads += 1
			return

		self.alphabet.update(seq)
		gc = seq.count('G') + seq.count('C')
		at = seq.count('A') + seq.count('T')
		gc_value = gc_percent(gc, at)
		if gc_value is None:
			self.gc_undefined_reads += 1
		else:
			self.gc_histogram[gc_value] += 1

		for score, n in scores.items():
			self.base_quality[score] += n
		self.min_quality[min(scores)] += 1

		resolution = self.config.tile_resolution
		for th in self.config.thresholds:
			high = sum(n for score, n in scores.items() if score >= th.score)
			self.tiles[th.name][tile_index(high, length, resolution)] += 1


def collect_read_stats(
	reader: SimpleFastqReader,
	config: Optional[QCConfig] = None,
	*,
	verbose: bool = True,
) -> ReadStatsAggregator:
	"""Scan ``reader`` to the end and return the filled aggregator.

	Any ``FormatError`` propagates immediately; there is no partial result.
	"""
	agg = ReadStatsAggregator(config)
	for rec in reader.parse():
		agg.add_record(rec)
		if verbose:
			n = agg.total_reads
			# Adaptive progress display: start with 100K, then increase interval
			if n <= 1_000_000:
				interval = 100_000
			elif n <= 10_000_000:
				interval = 1_000_000
			else:
				interval = 10_000_000
			if n % interval == 0:
				print(f"[INFO] Processed {n:,} reads...")
	if verbose and (agg.empty_reads or agg.gc_undefined_reads):
		print(
			f"[WARNING] Degenerate reads: {agg.empty_reads:,} empty "
			f"(excluded from GC%/MinQ/HighQ histograms), {agg.gc_undefined_reads:,} "
			f"without A/C/G/T bases (excluded from GC% histogram)"
		)
	return agg

"""fastq_qc – single-pass quality-control statistics for FASTQ reads.

Subpackages:
	io        – streaming, validating FASTQ reader
	metrics   – histogram aggregation, derivation and tabular export
	plot      – figures for the derived distributions

Typical use::

	from fastq_qc import SimpleFastqReader, collect_read_stats, derive_snapshot

	snapshot = derive_snapshot(collect_read_stats(SimpleFastqReader("reads.fq.gz")))
	print(snapshot.coverage.high_quality_reads)
"""

from .config import QCConfig, QualityThreshold, load_config
from .errors import FastqQCError, FormatError
from .io import SimpleFastqReader, FastqRecord
from .metrics import ReadStatsAggregator, QCSnapshot, collect_read_stats, derive_snapshot

__version__ = "0.1.0"
__all__ = [
	"QCConfig",
	"QualityThreshold",
	"load_config",
	"FastqQCError",
	"FormatError",
	"SimpleFastqReader",
	"FastqRecord",
	"ReadStatsAggregator",
	"QCSnapshot",
	"collect_read_stats",
	"derive_snapshot",
	"__version__",
]

"""Command line interface for fastq_qc.

Scans one FASTQ file, then writes summary / distribution tables, a JSON
snapshot and the QC figures next to an output prefix.

Example:
	fastq-qc reads.fq.gz out/sample1 --threads 4

Exit codes: 0 success, 1 usage or configuration error, 2 malformed FASTQ
input, 3 unreadable input.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Dict, List, Optional

from .config import load_config
from .errors import ConfigError, FormatError
from .io import SimpleFastqReader
from .metrics import collect_read_stats, derive_snapshot, QCSnapshot
from .metrics.tables import (
	base_quality_table,
	coverage_table,
	gc_distribution_table,
	min_quality_table,
	write_snapshot_json,
	write_tables,
)
from .plot import (
	plot_read_quality_pie,
	plot_gc_distribution,
	plot_base_quality_distribution,
	plot_min_quality_distribution,
	plot_high_quality_coverage,
)
from .utils import add_commas, file_prefix

EXIT_USAGE = 1
EXIT_FORMAT = 2
EXIT_IO = 3


def _exec_plot(func, kwargs):
	func(**kwargs)


def _run_plot_tasks(tasks, threads: int):
	if threads <= 1:
		for f, kw in tasks:
			f(**kw)
		return
	# macOS / spawn safe
	with ProcessPoolExecutor(max_workers=threads) as ex:
		futs = [ex.submit(_exec_plot, f, kw) for f, kw in tasks]
		for fut in as_completed(futs):
			_ = fut.result()


def build_plot_tasks(snapshot: QCSnapshot, out_prefix: str) -> List[tuple]:
	cov = snapshot.coverage
	return [
		(plot_read_quality_pie, {
			'categories': {
				'Poor-quality reads': cov.poor_quality_reads,
				'Medium-quality reads': cov.medium_quality_reads,
				'High-quality reads': cov.high_quality_reads,
			},
			'output_path': f"{out_prefix}.read_quality.png",
		}),
		(plot_gc_distribution, {
			'gc_df': gc_distribution_table(snapshot),
			'output_path': f"{out_prefix}.gc_distribution.png",
		}),
		(plot_base_quality_distribution, {
			'bq_df': base_quality_table(snapshot),
			'output_path': f"{out_prefix}.base_quality.png",
		}),
		(plot_min_quality_distribution, {
			'mq_df': min_quality_table(snapshot),
			'output_path': f"{out_prefix}.min_quality.png",
		}),
		(plot_high_quality_coverage, {
			'coverage_df': coverage_table(snapshot),
			'output_path': f"{out_prefix}.high_quality_coverage.png",
		}),
	]


def print_summary(snapshot: QCSnapshot, input_path: str, outputs: Dict[str, Path]) -> None:
	print("--- Summary of FASTQ ---")
	print(f"InputFile: {Path(input_path).name}")
	print(f"#Read: {add_commas(snapshot.total_reads)}")
	print(f"#Base: {add_commas(snapshot.total_bases)}")
	print(f"AvgReadLen: {snapshot.avg_length:.2f}")
	print(f"MinReadLen: {snapshot.min_length}")
	print(f"MaxReadLen: {snapshot.max_length}")
	cov = snapshot.coverage
	print(f"High-quality reads: {100 * cov.high_quality_reads:.1f}%")
	print(f"Poor-quality reads: {100 * cov.poor_quality_reads:.1f}%")
	print(f"OutFile: {','.join(str(p) for p in outputs.values())}")


def cmd_run(args: argparse.Namespace) -> int:
	try:
		config = load_config(Path(args.config) if args.config else None)
	except (ConfigError, OSError) as exc:
		print(f"[ERROR] {exc}", file=sys.stderr)
		return EXIT_USAGE

	reader = SimpleFastqReader(args.input, max_records=args.max_records)
	try:
		agg = collect_read_stats(reader, config)
	except FormatError as exc:
		print(f"[ERROR] {args.input}: {exc}", file=sys.stderr)
		return EXIT_FORMAT
	except UnicodeDecodeError as exc:
		print(f"[ERROR] {args.input}: not a text FASTQ file ({exc.reason})", file=sys.stderr)
		return EXIT_FORMAT
	except OSError as exc:
		print(f"[ERROR] cannot read {args.input}: {exc}", file=sys.stderr)
		return EXIT_IO
	snapshot = derive_snapshot(agg)

	out_prefix = args.out_prefix
	Path(out_prefix).parent.mkdir(parents=True, exist_ok=True)
	input_name = Path(args.input).name
	outputs = write_tables(snapshot, out_prefix, input_name=input_name)
	outputs['json'] = write_snapshot_json(snapshot, f"{out_prefix}.json")
	if not args.no_plots:
		tasks = build_plot_tasks(snapshot, out_prefix)
		_run_plot_tasks(tasks, args.threads)
		print(f"[INFO] Plots for {file_prefix(args.input)} written with prefix {out_prefix}")
	print_summary(snapshot, args.input, outputs)
	return 0


class _UsageParser(argparse.ArgumentParser):
	"""ArgumentParser that exits 1 (not argparse's 2) on usage errors."""

	def error(self, message):
		self.print_usage(sys.stderr)
		self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
	p = _UsageParser(
		prog="fastq-qc",
		description="Read a FASTQ file and generate quality distribution and GC% of the reads",
	)
	p.add_argument("input", help="Input FASTQ or FASTQ.GZ file")
	p.add_argument("out_prefix", help="Output name prefix (tables, JSON and plots are written as <prefix>.*)")
	p.add_argument("--config", default=None, help="TOML file with a [fastq_qc] table overriding QC parameters")
	p.add_argument("--threads", type=int, default=1, help="Parallel plot generation processes")
	p.add_argument("--no-plots", action="store_true", help="Only write tables and the JSON snapshot")
	p.add_argument("--max-records", type=int, default=None, help="Limit number of reads parsed (debug)")
	p.set_defaults(func=cmd_run)
	return p


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	return args.func(args)


if __name__ == "__main__":  # pragma: no cover
	sys.exit(main())

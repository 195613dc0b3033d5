"""Tabular export of a finished ``QCSnapshot``.

Every function here only reshapes values already present on the snapshot;
nothing is re-derived. DataFrames use the column names written to the TSV
files so downstream tools can read either.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from ..utils import add_commas, fraction
from .derivation import QCSnapshot

__all__ = [
    "summary_table",
    "alphabet_table",
    "gc_distribution_table",
    "base_quality_table",
    "quality_band_table",
    "min_quality_table",
    "coverage_table",
    "coverage_points_table",
    "snapshot_to_dict",
    "write_snapshot_json",
    "write_tables",
]


def summary_table(snapshot: QCSnapshot, input_name: Optional[str] = None) -> pd.DataFrame:
    """Return one row per headline metric: columns Metric, Value."""
    cov = snapshot.coverage
    rows = []
    if input_name:
        rows.append(("InputFile", input_name))
    rows.extend([
        ("#Read", add_commas(snapshot.total_reads)),
        ("#Base", add_commas(snapshot.total_bases)),
        ("AvgReadLen", f"{snapshot.avg_length:.2f}"),
        ("MinReadLen", str(snapshot.min_length)),
        ("MaxReadLen", str(snapshot.max_length)),
        ("GC%", f"{snapshot.gc_content:.2f}%"),
    ])
    for band in snapshot.quality_bands:
        rows.append((f"Bases {band.label}", f"{band.percent:.1f}%"))
    for cut, pct in snapshot.min_quality_rollups.items():
        rows.append((f"Reads MinQ>={cut}", f"{pct:.1f}%"))
    high_score = snapshot.thresholds[cov.high_threshold]
    poor_score = snapshot.thresholds[cov.poor_threshold]
    rows.extend([
        ("High-quality reads", f"{100 * cov.high_quality_reads:.1f}%"),
        (f"%HighQ({high_score}) >= 95%", f"{100 * cov.high_at_95:.1f}%"),
        (f"%HighQ({high_score}) >= 90%", f"{100 * cov.high_at_90:.1f}%"),
        (f"%HighQ({poor_score}) >= 90%", f"{100 * cov.poor_at_90:.1f}%"),
        ("Medium-quality reads", f"{100 * cov.medium_quality_reads:.1f}%"),
        ("Poor-quality reads", f"{100 * cov.poor_quality_reads:.1f}%"),
    ])
    if snapshot.empty_reads:
        rows.append(("EmptyReads", add_commas(snapshot.empty_reads)))
    if snapshot.gc_undefined_reads:
        rows.append(("ReadsWithoutGC", add_commas(snapshot.gc_undefined_reads)))
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def alphabet_table(snapshot: QCSnapshot) -> pd.DataFrame:
    """Columns: Symbol, Count, Freq% (ambiguous symbol last)."""
    return pd.DataFrame(
        [(e.symbol, e.count, e.percent) for e in snapshot.alphabet_table],
        columns=["Symbol", "Count", "Freq%"],
    )


def gc_distribution_table(snapshot: QCSnapshot) -> pd.DataFrame:
    """Columns: GC%, Count, Freq (share of reads with a defined GC%)."""
    denom = sum(snapshot.gc_histogram)
    return pd.DataFrame({
        "GC%": range(len(snapshot.gc_histogram)),
        "Count": snapshot.gc_histogram,
        "Freq": [fraction(c, denom) for c in snapshot.gc_histogram],
    })


def base_quality_table(snapshot: QCSnapshot) -> pd.DataFrame:
    """Columns: Quality, Count, Freq (share of all bases)."""
    return pd.DataFrame({
        "Quality": range(len(snapshot.base_quality)),
        "Count": snapshot.base_quality,
        "Freq": [fraction(c, snapshot.total_bases) for c in snapshot.base_quality],
    })


def quality_band_table(snapshot: QCSnapshot) -> pd.DataFrame:
    return pd.DataFrame(
        [(b.label, b.low, b.high - 1, b.count, b.percent) for b in snapshot.quality_bands],
        columns=["Band", "MinQ", "MaxQ", "Count", "Percent"],
    )


def min_quality_table(snapshot: QCSnapshot) -> pd.DataFrame:
    """Columns: MinQ, Count, Freq, CumuFreq (share of reads whose MinQ >= value)."""
    df = pd.DataFrame({
        "MinQ": range(len(snapshot.min_quality)),
        "Count": snapshot.min_quality,
    })
    scored = snapshot.scored_reads
    df["Freq"] = [fraction(c, scored) for c in df["Count"]]
    at_least = df["Count"][::-1].cumsum()[::-1]
    df["CumuFreq"] = [fraction(c, scored) for c in at_least]
    return df


def coverage_table(snapshot: QCSnapshot) -> pd.DataFrame:
    """Coverage curves, top tile first: column X% then one 'q=<score>' column per threshold."""
    res = snapshot.tile_resolution
    tiles = list(range(res, -1, -1))
    data: Dict[str, Any] = {
        "Tile": tiles,
        "X%": [t * 100.0 / res for t in tiles],
    }
    for name, curve in snapshot.coverage_curves.items():
        data[f"q={snapshot.thresholds[name]}"] = [curve[t] for t in tiles]
    return pd.DataFrame(data)


def coverage_points_table(snapshot: QCSnapshot) -> pd.DataFrame:
    rows = []
    for name, points in snapshot.coverage_points.items():
        for pct, cov in points.items():
            rows.append({
                "Threshold": name,
                "Score": snapshot.thresholds[name],
                "HighQ%": pct,
                "Coverage": cov,
            })
    return pd.DataFrame(rows, columns=["Threshold", "Score", "HighQ%", "Coverage"])


def snapshot_to_dict(snapshot: QCSnapshot) -> Dict[str, Any]:
    """Plain JSON-compatible dict (tuples become lists, int keys become strings)."""
    def _plain(value):
        if isinstance(value, dict):
            return {str(k): _plain(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [_plain(v) for v in value]
        return value

    return _plain(asdict(snapshot))


def write_snapshot_json(snapshot: QCSnapshot, path) -> Path:
    path = Path(path)
    with open(path, "w") as fh:
        json.dump(snapshot_to_dict(snapshot), fh, indent=2)
    return path


def write_tables(snapshot: QCSnapshot, out_prefix: str, input_name: Optional[str] = None) -> Dict[str, Path]:
    """Write every table as ``<out_prefix>.<name>.tsv``; return name -> path."""
    tables = {
        "summary": summary_table(snapshot, input_name),
        "alphabet": alphabet_table(snapshot),
        "gc_distribution": gc_distribution_table(snapshot),
        "base_quality": base_quality_table(snapshot),
        "quality_bands": quality_band_table(snapshot),
        "min_quality": min_quality_table(snapshot),
        "coverage": coverage_table(snapshot),
        "coverage_points": coverage_points_table(snapshot),
    }
    written: Dict[str, Path] = {}
    for name, df in tables.items():
        path = Path(f"{out_prefix}.{name}.tsv")
        df.to_csv(path, sep="\t", index=False)
        written[name] = path
    return written

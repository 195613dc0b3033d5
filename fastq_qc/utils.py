"""Small utility helpers used across the fastq_qc package.

This module intentionally keeps a tiny surface area of pure-Python helpers that
are easy to unit-test and have no heavy dependencies.
"""
from pathlib import PurePath
from typing import Optional


def gc_percent(gc: int, at: int) -> Optional[int]:
    """Return round(100 * GC / (GC + AT)) as an int, halves rounded up.

    Integer arithmetic keeps 12.5 -> 13 (C ``round`` semantics) instead of
    Python's banker's rounding. Returns None when GC + AT == 0.
    """
    total = gc + at
    if total <= 0:
        return None
    return (200 * gc + total) // (2 * total)


def tile_index(high_quality_bases: int, length: int, resolution: int) -> int:
    """floor(resolution * high_quality_bases / length).

    Floor, not round: only a read whose bases are all high quality reaches
    the top tile (``resolution``), so the index never exceeds the histogram.
    """
    if length <= 0:
        raise ValueError("tile index undefined for an empty read")
    return (resolution * high_quality_bases) // length


def percent(part: float, whole: float) -> float:
    """100 * part / whole, or 0.0 for an empty denominator."""
    if not whole:
        return 0.0
    return 100.0 * part / whole


def fraction(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return part / whole


def add_commas(value: int) -> str:
    """Format an integer with thousands separators: 1234567 -> '1,234,567'."""
    return f"{value:,}"


def file_prefix(path: str) -> str:
    """File name without directory and last extension ('.gz' is stripped first).

    Examples: 'runs/a.fastq' -> 'a', 'a.fq.gz' -> 'a', 'reads' -> 'reads'
    """
    name = PurePath(path).name
    if name.endswith(".gz"):
        name = name[:-3]
    stem, dot, _ext = name.rpartition(".")
    return stem if dot and stem else name


__all__ = [
    "gc_percent",
    "tile_index",
    "percent",
    "fraction",
    "add_commas",
    "file_prefix",
]

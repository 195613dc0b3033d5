"""Tests for the derivation of summary statistics from aggregated histograms."""

import pytest

from fastq_qc.config import QCConfig
from fastq_qc.metrics import collect_read_stats, derive_snapshot
from fastq_qc.metrics.derivation import coverage_curve

from _fastq import fastq_text, reader_for


def snapshot_of(records, config=None):
    return derive_snapshot(collect_read_stats(reader_for(fastq_text(records)), config, verbose=False))


def test_two_record_scenario_bands():
    snap = snapshot_of([("GGCC", "IIII"), ("ATAT", "!!!!")])
    assert snap.total_reads == 2
    assert snap.total_bases == 8
    bands = {b.label: b.percent for b in snap.quality_bands}
    assert list(bands) == ["<Q15", "Q15-Q19", "Q20-Q29", "Q30+"]
    assert bands["Q30+"] == 50.0
    assert bands["<Q15"] == 50.0
    assert bands["Q15-Q19"] == 0.0
    assert snap.avg_length == 4.0
    assert snap.gc_content == 50.0


def test_named_coverage_values():
    snap = snapshot_of([("GGCC", "IIII"), ("ATAT", "!!!!")])
    cov = snap.coverage
    assert cov.high_quality_reads == 0.5
    assert cov.poor_quality_reads == 0.5
    assert cov.medium_quality_reads == 0.0
    assert cov.high_at_95 == 0.5
    assert cov.poor_at_90 == 0.5


def test_coverage_points_read_at_exact_tiles():
    # 19 of 20 bases >= Q20 -> exactly 95% -> tile 190
    snap = snapshot_of([("A" * 20, "I" * 19 + "!"), ("A" * 20, "I" * 20)])
    q20 = snap.coverage_points["q20"]
    assert q20[100] == 0.5
    assert q20[95] == 1.0
    assert q20[90] == 1.0
    assert snap.tiles["q20"][190] == 1
    assert snap.coverage.medium_quality_reads == 0.5


def test_just_below_boundary_is_not_covered():
    # 17 of 19 bases high: 89.47% -> tile 178, below the 90% tile (180)
    snap = snapshot_of([("A" * 19, "I" * 17 + "!!")])
    assert snap.coverage_points["q15"][90] == 0.0
    assert snap.coverage.poor_quality_reads == 1.0


def test_coverage_curve_is_monotonic():
    records = [("ACGTACGTAC", "I" * k + "!" * (10 - k)) for k in range(11)]
    snap = snapshot_of(records)
    for name, curve in snap.coverage_curves.items():
        assert len(curve) == 201
        assert curve[0] == 1.0
        assert all(curve[i] >= curve[i + 1] for i in range(200))
        assert snap.coverage_at(name, 201) == 0.0
        assert snap.coverage_at(name, 0) == 1.0


def test_coverage_curve_without_reads():
    assert coverage_curve([0, 0, 0], 0) == (0.0, 0.0, 0.0)
    assert coverage_curve([1, 0, 3], 4) == (1.0, 0.75, 0.75)


def test_min_quality_rollups():
    # minima: 40, 15, 10, 2
    snap = snapshot_of([("AA", "II"), ("AA", "0I"), ("AA", "+I"), ("AA", "#I")])
    assert snap.min_quality_rollups == {10: 75.0, 15: 50.0, 20: 25.0}


def test_alphabet_table_puts_ambiguous_symbol_last():
    snap = snapshot_of([("NACGTN", "IIIIII")])
    table = snap.alphabet_table
    assert [e.symbol for e in table] == ["A", "C", "G", "T", "N"]
    assert table[-1].count == 2
    assert table[-1].percent == pytest.approx(100 * 2 / 6)


def test_derivation_is_idempotent():
    agg = collect_read_stats(reader_for(fastq_text([("ACGT", "I5!#"), ("GG", "@@")])), verbose=False)
    assert derive_snapshot(agg) == derive_snapshot(agg)


def test_empty_input_snapshot():
    snap = snapshot_of([])
    assert snap.total_reads == 0
    assert snap.avg_length == 0.0
    assert snap.min_length == 0
    assert snap.coverage.high_quality_reads == 0.0
    assert snap.coverage.poor_quality_reads == 0.0
    assert all(b.percent == 0.0 for b in snap.quality_bands)


def test_per_read_shares_use_scored_reads():
    snap = derive_snapshot(collect_read_stats(reader_for("@e\n\n+\n\n@r\nAC\n+\nII\n"), verbose=False))
    assert snap.total_reads == 2
    assert snap.scored_reads == 1
    assert snap.coverage.high_quality_reads == 1.0
    assert snap.coverage_curves["q20"][0] == 1.0
    assert snap.avg_length == 1.0


def test_finer_tile_resolution():
    cfg = QCConfig(tile_resolution=1000)
    snap = snapshot_of([("A" * 20, "I" * 19 + "!")], cfg)
    assert len(snap.tiles["q20"]) == 1001
    assert snap.coverage_points["q20"][95] == 1.0
    assert snap.coverage_points["q20"][100] == 0.0


def test_average_length_rounded_to_two_digits():
    snap = snapshot_of([("ACG", "III"), ("AC", "II"), ("AC", "II")])
    assert snap.avg_length == 2.33


@pytest.mark.parametrize("high,medium,poor", [(1, 1, 1), (3, 0, 7), (2, 5, 0), (1, 2, 4)])
def test_read_categories_partition_scored_reads(high, medium, poor):
    # Q40 everywhere / Q15 everywhere / all Q0
    records = [("A" * 10, "I" * 10)] * high + [("A" * 10, "0" * 10)] * medium + [("A" * 10, "!" * 10)] * poor
    cov = snapshot_of(records).coverage
    n = high + medium + poor
    assert cov.medium_quality_reads >= 0.0
    assert cov.high_quality_reads == pytest.approx(high / n)
    assert cov.medium_quality_reads == pytest.approx(medium / n)
    assert cov.poor_quality_reads == pytest.approx(poor / n)

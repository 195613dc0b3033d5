"""Smoke tests for the figure functions (non-interactive backend)."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from fastq_qc.cli import main  # noqa: E402
from fastq_qc.metrics import collect_read_stats, derive_snapshot  # noqa: E402
from fastq_qc.metrics.tables import (  # noqa: E402
    base_quality_table,
    coverage_table,
    gc_distribution_table,
    min_quality_table,
)
from fastq_qc.plot import (  # noqa: E402
    plot_base_quality_distribution,
    plot_gc_distribution,
    plot_high_quality_coverage,
    plot_min_quality_distribution,
    plot_read_quality_pie,
)

from _fastq import fastq_text, reader_for  # noqa: E402


@pytest.fixture
def snapshot():
    records = [("GGCCA", "IIII5"), ("ATATN", "!!!!I"), ("ACGTA", "@@@@@")]
    return derive_snapshot(collect_read_stats(reader_for(fastq_text(records)), verbose=False))


def test_plots_return_figures(snapshot):
    figs = [
        plot_gc_distribution(gc_distribution_table(snapshot)),
        plot_base_quality_distribution(base_quality_table(snapshot)),
        plot_min_quality_distribution(min_quality_table(snapshot)),
        plot_high_quality_coverage(coverage_table(snapshot)),
        plot_read_quality_pie({"Poor-quality reads": 0.3, "High-quality reads": 0.7}),
    ]
    for fig in figs:
        assert isinstance(fig, plt.Figure)
        plt.close(fig)


def test_plot_saved_when_path_given(snapshot, tmp_path):
    out = tmp_path / "gc.png"
    assert plot_gc_distribution(gc_distribution_table(snapshot), output_path=str(out)) is None
    assert out.exists()


def test_pie_skipped_when_empty(capsys):
    assert plot_read_quality_pie({"Poor-quality reads": 0.0}) is None
    assert "skipping" in capsys.readouterr().out


def test_coverage_plot_requires_threshold_columns():
    import pandas as pd

    with pytest.raises(ValueError):
        plot_high_quality_coverage(pd.DataFrame({"X%": [100.0]}))


def test_cli_writes_plots(fastq_file, tmp_path):
    path = fastq_file([("GGCC", "IIII"), ("ATAT", "!!!!")])
    prefix = tmp_path / "run"
    assert main([str(path), str(prefix)]) == 0
    for name in ("read_quality", "gc_distribution", "base_quality", "min_quality", "high_quality_coverage"):
        assert (tmp_path / f"run.{name}.png").exists()

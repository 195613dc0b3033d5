"""Read-level QC plotting functions.

Implements:
 1. Read quality categorisation (pie: poor / medium / high)
 2. Per-read GC% distribution (column)
 3. Per-base quality value distribution (area)
 4. Per-read minimal quality distribution (area)
 5. Coverage of reads with sufficient high-quality bases (line, one per threshold)

Inputs are the DataFrames built by ``fastq_qc.metrics.tables`` so the same
numbers end up in the TSV files and in the figures.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt
from matplotlib.ticker import PercentFormatter

from .base import set_plot_style, save_figure, binned_bar_plot, binned_area_plot

__all__ = [
	"plot_read_quality_pie",
	"plot_gc_distribution",
	"plot_base_quality_distribution",
	"plot_min_quality_distribution",
	"plot_high_quality_coverage",
]


def plot_read_quality_pie(
	categories: Dict[str, float],
	*,
	output_path: Optional[str] = None,
	title: str = "Categorization of read quality",
) -> Optional[plt.Figure]:
	"""Pie chart of read categories, e.g. {'Poor-quality reads': 0.1, ...}.

	Categories with a zero share are dropped; nothing is drawn when all are zero.
	"""
	items = [(lab, float(v)) for lab, v in categories.items() if v > 0]
	if not items:
		print("No scored reads to categorize; skipping read quality pie.")
		return None
	set_plot_style()
	fig, ax = plt.subplots(figsize=(6, 6))
	labels = [f"{lab}: {v * 100:.1f}%" for lab, v in items]
	colors = {"Poor": "red", "Medium": "orange", "High": "green"}
	pie_colors = [next((c for k, c in colors.items() if lab.startswith(k)), None) for lab, _ in items]
	if any(c is None for c in pie_colors):
		pie_colors = None
	ax.pie([v for _, v in items], labels=labels, colors=pie_colors, startangle=90, counterclock=False)
	ax.set_title(title)
	fig.tight_layout()
	return save_figure(fig, output_path)


def plot_gc_distribution(
	gc_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Frequency of reads' GC%",
) -> Optional[plt.Figure]:
	"""Columns required: GC%, Freq."""
	return binned_bar_plot(
		gc_df["GC%"],
		gc_df["Freq"],
		output_path=output_path,
		title=title,
		xlabel="GC%",
		color="#76A7FA",
	)


def plot_base_quality_distribution(
	bq_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Frequency of base quality values",
) -> Optional[plt.Figure]:
	"""Columns required: Quality, Freq."""
	return binned_area_plot(
		bq_df["Quality"],
		bq_df["Freq"],
		output_path=output_path,
		title=title,
		xlabel="Quality value",
		color="#097138",
		xmax=float(bq_df["Quality"].max()) if not bq_df.empty else None,
	)


def plot_min_quality_distribution(
	mq_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "MinimalQ distribution",
) -> Optional[plt.Figure]:
	"""Columns required: MinQ, Freq."""
	return binned_area_plot(
		mq_df["MinQ"],
		mq_df["Freq"],
		output_path=output_path,
		title=title,
		xlabel="MinimalQ value",
		color="#a52714",
		xmax=float(mq_df["MinQ"].max()) if not mq_df.empty else None,
	)


def plot_high_quality_coverage(
	coverage_df: pd.DataFrame,
	*,
	output_path: Optional[str] = None,
	title: str = "Coverage of reads with %HighQ(q) >= X%",
	x_min: float = 50.0,
) -> Optional[plt.Figure]:
	"""One line per ``q=<score>`` column against X%, drawn from 100 down to ``x_min``."""
	value_cols = [c for c in coverage_df.columns if c.startswith("q=")]
	if not value_cols:
		raise ValueError("DataFrame must contain at least one 'q=<score>' column")
	long_df = coverage_df.melt(id_vars=["X%"], value_vars=value_cols, var_name="Threshold", value_name="Coverage")
	set_plot_style()
	fig, ax = plt.subplots(figsize=(10, 4))
	palette = ["#a52714", "#097138"] if len(value_cols) == 2 else None
	sns.lineplot(data=long_df, x="X%", y="Coverage", hue="Threshold", palette=palette, ax=ax)
	# X% decreases left to right, matching "at least X% of bases" reading order
	ax.set_xlim(100, x_min)
	ax.set_ylim(0, 1.02)
	ax.yaxis.set_major_formatter(PercentFormatter(xmax=1.0))
	ax.set_title(title)
	ax.set_xlabel(f"X% (X% from 100 downto {x_min:g})")
	ax.set_ylabel("Coverage%")
	fig.tight_layout()
	return save_figure(fig, output_path)

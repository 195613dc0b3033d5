"""Base plotting utilities shared across QC plot modules.

This module centralises style configuration and small helper wrappers
around seaborn/matplotlib so higher-level plot functions remain concise
and consistent. Each helper returns a matplotlib Figure when an
``output_path`` is not provided; otherwise the figure is saved and
closed (to avoid memory accumulation in batch runs) and ``None`` is
returned.

Unlike raw-value histograms, every FASTQ distribution arrives already
binned (one count per bucket), so the helpers here plot bucket -> value
pairs directly instead of re-binning.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.ticker import PercentFormatter
import seaborn as sns
import numpy as np

__all__ = [
	"set_plot_style",
	"save_figure",
	"binned_bar_plot",
	"binned_area_plot",
]


def set_plot_style() -> None:
	"""Apply a unified visual style.

	Centralised so we can later expose style choices via configuration.
	"""
	sns.set_theme(style="whitegrid")
	plt.rcParams.update({
		"axes.titlesize": 13,
		"axes.labelsize": 11,
		"font.size": 10,
		"figure.dpi": 100,
	})


def save_figure(fig: plt.Figure, output_path: Optional[str]) -> Optional[plt.Figure]:
	"""Save figure if ``output_path`` provided else return it.

	Parameters
	----------
	fig : matplotlib.figure.Figure
		Figure to save or return.
	output_path : str | None
		Path to save. If None the figure is returned and *not* closed.
	"""
	if output_path:
		fig.savefig(output_path, bbox_inches="tight")
		plt.close(fig)
		return None
	return fig


def binned_bar_plot(
	buckets: Sequence[float],
	freqs: Sequence[float],
	*,
	output_path: Optional[str] = None,
	title: str = "",
	xlabel: str = "",
	ylabel: str = "Freq%",
	color: str = "#76A7FA",
	figsize: Tuple[int, int] = (10, 4),
) -> Optional[plt.Figure]:
	"""Column chart of pre-binned fractions (y axis shown as percent)."""
	set_plot_style()
	fig, ax = plt.subplots(figsize=figsize)
	ax.bar(np.asarray(buckets), np.asarray(freqs, dtype=float), width=0.9, color=color)
	ax.yaxis.set_major_formatter(PercentFormatter(xmax=1.0))
	ax.set_title(title)
	ax.set_xlabel(xlabel)
	ax.set_ylabel(ylabel)
	fig.tight_layout()
	return save_figure(fig, output_path)


def binned_area_plot(
	buckets: Sequence[float],
	freqs: Sequence[float],
	*,
	output_path: Optional[str] = None,
	title: str = "",
	xlabel: str = "",
	ylabel: str = "Freq%",
	color: str = "#097138",
	xmax: Optional[float] = None,
	figsize: Tuple[int, int] = (10, 4),
) -> Optional[plt.Figure]:
	"""Filled line chart of pre-binned fractions."""
	set_plot_style()
	x = np.asarray(buckets, dtype=float)
	y = np.asarray(freqs, dtype=float)
	fig, ax = plt.subplots(figsize=figsize)
	ax.plot(x, y, color=color)
	ax.fill_between(x, y, color=color, alpha=0.3)
	ax.yaxis.set_major_formatter(PercentFormatter(xmax=1.0))
	if xmax is not None:
		ax.set_xlim(0, xmax)
	ax.set_ylim(bottom=0)
	ax.set_title(title)
	ax.set_xlabel(xlabel)
	ax.set_ylabel(ylabel)
	fig.tight_layout()
	return save_figure(fig, output_path)

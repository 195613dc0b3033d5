"""High-level plotting API for the fastq_qc package.

All figures live in ``read_plots``; ``base`` holds the shared style and
save helpers.

Import convenience: ``from fastq_qc.plot import plot_gc_distribution``.
"""

from .read_plots import *  # noqa: F401,F403
from .read_plots import __all__ as _read_all

__all__ = list(_read_all)

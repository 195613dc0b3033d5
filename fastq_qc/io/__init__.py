"""I/O subpackage.

Currently exposes a lightweight streaming FASTQ reader. Swap / extend
with high-performance parsers as required.
"""

from .fastq_reader import SimpleFastqReader, FastqRecord  # noqa: F401

__all__ = ["SimpleFastqReader", "FastqRecord"]

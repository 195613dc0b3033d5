"""Streaming FASTQ reader for QC metric extraction.

Records are pulled four physical lines at a time and validated on the fly;
nothing beyond the current record is kept in memory, so arbitrarily large
(optionally gzipped) files can be scanned in a single pass.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from os import PathLike, fspath
from typing import Iterator, Optional, TextIO, Union
import gzip

from ..errors import (
	MissingIdentifierMarker,
	MissingSeparatorMarker,
	QualityLengthMismatch,
	TruncatedRecord,
)

IDENTIFIER_MARKER = "@"
SEPARATOR_MARKER = "+"


@dataclass
class FastqRecord:
	"""One validated four-line read.

	Attributes
	----------
	identifier, separator : str
		Header lines, markers included, newline stripped.
	sequence, quality : str
		Base calls and their quality codes; always the same length.
	line_number : int
		1-based line number of the identifier line (diagnostics only).
	"""

	identifier: str
	sequence: str
	separator: str
	quality: str
	line_number: int

	def __len__(self) -> int:
		return len(self.sequence)

	@property
	def quality_line_number(self) -> int:
		return self.line_number + 3


def _chomp(line: str) -> str:
	if line.endswith("\n"):
		line = line[:-1]
		if line.endswith("\r"):
			line = line[:-1]
	return line


class SimpleFastqReader:
	"""Minimal streaming FASTQ reader.

	Parameters
	----------
	source : str | PathLike | TextIO
		Path to a (optionally gzipped) FASTQ file, or an open text stream.
		A path is re-opened on every ``parse()`` call; a stream can only be
		consumed once.
	max_records : int | None
		Optional limit for testing / faster prototyping.
	"""

	def __init__(self, source: Union[str, PathLike, TextIO], max_records: Optional[int] = None):
		self.source = source
		self.max_records = max_records

	# -- internal helpers -------------------------------------------------
	def _open(self):  # type: ignore[return-type]
		if not isinstance(self.source, (str, PathLike)):
			return nullcontext(self.source)
		path = fspath(self.source)
		if path.endswith('.gz'):
			return gzip.open(path, 'rt')
		return open(path, 'rt')

	def parse(self) -> Iterator[FastqRecord]:
		"""Yield validated records; raise a ``FormatError`` on the first bad one."""
		count = 0
		line = 0
		with self._open() as fh:
			while True:
				if self.max_records and count >= self.max_records:
					break
				header = fh.readline()
				if not header:
					break  # clean end of input
				line += 1
				start = line
				if not header.startswith(IDENTIFIER_MARKER):
					raise MissingIdentifierMarker(line)

				seq = fh.readline()
				line += 1
				if not seq:
					raise TruncatedRecord(line)
				seq = _chomp(seq)

				sep = fh.readline()
				line += 1
				if not sep:
					raise TruncatedRecord(line)
				if not sep.startswith(SEPARATOR_MARKER):
					raise MissingSeparatorMarker(line)

				qual = fh.readline()
				line += 1
				if not qual:
					raise TruncatedRecord(line)
				qual = _chomp(qual)
				if len(qual) != len(seq):
					raise QualityLengthMismatch(
						line,
						f"incorrect length of Q-string ({len(qual)} quality codes for {len(seq)} bases)",
					)
				yield FastqRecord(_chomp(header), seq, _chomp(sep), qual, start)
				count += 1

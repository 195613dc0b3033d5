import pytest

from _fastq import fastq_text


@pytest.fixture
def fastq_file(tmp_path):
    """Write (sequence, quality) pairs to a FASTQ file and return its path."""

    def _write(records, name="reads.fq"):
        path = tmp_path / name
        path.write_text(fastq_text(records))
        return path

    return _write

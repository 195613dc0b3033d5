"""Tests for the CLI entry point."""

import json

import pytest

from fastq_qc.cli import main


def test_missing_arguments_exit_1(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["only_one_arg.fq"])
    assert exc_info.value.code == 1
    assert "usage:" in capsys.readouterr().err


def test_too_many_arguments_exit_1():
    with pytest.raises(SystemExit) as exc_info:
        main(["a.fq", "out", "extra"])
    assert exc_info.value.code == 1


def test_run_writes_outputs_and_summary(fastq_file, tmp_path, capsys):
    path = fastq_file([("GGCC", "IIII"), ("ATAT", "!!!!")])
    prefix = tmp_path / "out" / "sample"
    assert main([str(path), str(prefix), "--no-plots"]) == 0
    out = capsys.readouterr().out
    assert "--- Summary of FASTQ ---" in out
    assert "#Read: 2" in out
    assert "AvgReadLen: 4.00" in out
    assert (tmp_path / "out" / "sample.summary.tsv").exists()
    data = json.loads((tmp_path / "out" / "sample.json").read_text())
    assert data["total_bases"] == 8


def test_format_error_exit_2(tmp_path, capsys):
    path = tmp_path / "bad.fq"
    path.write_text("@r1\nACGT\nACTG\nIIII\n")
    assert main([str(path), str(tmp_path / "bad"), "--no-plots"]) == 2
    err = capsys.readouterr().err
    assert "[ERROR]" in err
    assert "line #3" in err
    assert not (tmp_path / "bad.summary.tsv").exists()


def test_missing_input_exit_3(tmp_path, capsys):
    assert main([str(tmp_path / "nope.fq"), str(tmp_path / "x"), "--no-plots"]) == 3
    assert "cannot read" in capsys.readouterr().err


def test_bad_config_exit_1(fastq_file, tmp_path):
    path = fastq_file([("AC", "II")])
    cfg = tmp_path / "qc.toml"
    cfg.write_text("tile_resolution = 150\n")
    assert main([str(path), str(tmp_path / "x"), "--config", str(cfg), "--no-plots"]) == 1


@pytest.mark.parametrize("setting", ["tile_resolution = 200.0", 'quality_offset = "33"'])
def test_mistyped_config_exit_1(fastq_file, tmp_path, capsys, setting):
    path = fastq_file([("AC", "II")])
    cfg = tmp_path / "qc.toml"
    cfg.write_text(setting + "\n")
    assert main([str(path), str(tmp_path / "x"), "--config", str(cfg), "--no-plots"]) == 1
    assert "[ERROR]" in capsys.readouterr().err

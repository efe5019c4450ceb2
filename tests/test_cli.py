import pytest

from sigfit.cli import main
from sigfit.fit import OUTPUT_FILE_NAME


def _write_inputs(tmp_path):
    samples = tmp_path / "samples.txt"
    samples.write_text("Samples\tP1\nA\t10\nB\t10\nC\t10\nD\t10\nE\t0\nF\t0\n")
    sigs = tmp_path / "sigs.txt"
    sigs.write_text(
        "Type\tSBS1\tSBS2\tSBS3\n"
        "A\t0.5\t0\t0\nB\t0.5\t0\t0\n"
        "C\t0\t0.5\t0\nD\t0\t0.5\t0\n"
        "E\t0\t0\t0.5\nF\t0\t0\t0.5\n"
    )
    return samples, sigs


def test_main_writes_output(tmp_path, capsys):
    samples, sigs = _write_inputs(tmp_path)
    out_dir = tmp_path / "out"
    code = main(
        [
            str(samples),
            "--signatures",
            str(sigs),
            "--output",
            str(out_dir),
            "--mutation-count",
            "-1",
            "-R",
            "20",
        ]
    )
    assert code == 0
    lines = (out_dir / OUTPUT_FILE_NAME).read_text().splitlines()
    assert lines[0].startswith("Patient,")
    row = lines[1].split(",")
    assert row[0] == "P1"
    assert row[3] == "0"
    assert float(row[1]) + float(row[2]) == pytest.approx(1.0, abs=1e-5)
    assert "Execution time" in capsys.readouterr().out


def test_main_reports_missing_file(tmp_path, capsys):
    _, sigs = _write_inputs(tmp_path)
    code = main(
        [str(tmp_path / "absent.txt"), "--signatures", str(sigs), "--output", str(tmp_path)]
    )
    assert code == 1
    assert "error" in capsys.readouterr().err
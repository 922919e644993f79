import json

import pytest

from storm_impact.cli import main


@pytest.fixture
def source(raw_frame, tmp_path):
    path = tmp_path / "StormData.csv.bz2"
    raw_frame.to_csv(path, index=False)
    return path


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_classify(capsys):
    assert main(["classify", "ICE STORM WIND", "DUST DEVIL"]) == 0
    out = capsys.readouterr().out
    assert "'ICE STORM WIND' -> Winter Storm" in out
    assert "rule 15: ICE" in out
    assert "'DUST DEVIL' -> other" in out
    assert "no rule matches" in out


def test_summary(source, capsys):
    assert main(["summary", "--source", str(source), "--no-fetch", "--sort", "economic_loss"]) == 0
    out = capsys.readouterr().out
    lines = [line for line in out.splitlines() if line.startswith(("Flood", "Wind"))]
    assert lines[0].startswith("Flood")
    assert "$5.0M" in lines[0]
    assert "$10.0K" in lines[1]


def test_summary_cutoff(source, capsys):
    assert main(["summary", "--source", str(source), "--no-fetch", "--cutoff", "1990"]) == 0
    out = capsys.readouterr().out
    heat = next(line for line in out.splitlines() if line.startswith("Heat"))
    assert heat.split()[1:3] == ["1", "3"]


def test_report(source, tmp_path):
    out_dir = tmp_path / "reports"
    assert main(["report", "--source", str(source), "--no-fetch", "--output", str(out_dir)]) == 0
    assert (out_dir / "storm_impact_1993.xlsx").exists()
    data = json.loads((out_dir / "storm_impact_1993.json").read_text())
    assert data["totals"]["casualties"] == 3


def test_strict_report_fails_on_bad_date(raw_frame, tmp_path, capsys):
    raw_frame.loc[0, "BGN_DATE"] = "not a date"
    path = tmp_path / "StormData.csv.bz2"
    raw_frame.to_csv(path, index=False)
    assert main(["summary", "--source", str(path), "--no-fetch", "--strict"]) == 1
    assert "malformed begin date" in capsys.readouterr().err


def test_missing_source(tmp_path, capsys):
    assert main(["summary", "--source", str(tmp_path / "nope.csv"), "--no-fetch"]) == 1
    assert "Error:" in capsys.readouterr().err

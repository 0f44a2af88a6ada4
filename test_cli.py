"""
Tests for the command line tool.
"""

import json

from neon_heights.cli import main
from neon_heights.session import GenerationContext


def run_cli(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr()


def test_seed_command(capsys):
    code, out = run_cli(capsys, "seed", "--seed", "neon")

    report = json.loads(out.out)
    assert code == 0
    assert report["seed"] == "neon"
    assert bytes.fromhex(report["hex"]).endswith(b"neon")


def test_terrain_command_matches_context(capsys):
    code, out = run_cli(capsys, "terrain", "--seed", "neon", "--start", "100", "--count", "5")

    report = json.loads(out.out)
    context = GenerationContext.from_text("neon")
    assert code == 0
    assert [cell["x"] for cell in report["cells"]] == [100, 101, 102, 103, 104]
    assert [cell["height"] for cell in report["cells"]] == [context.height(x) for x in range(100, 105)]
    assert [cell["hole"] for cell in report["cells"]] == [context.is_hole(x) for x in range(100, 105)]


def test_upgrades_command(capsys):
    code, out = run_cli(capsys, "upgrades", "--seed", "neon", "--draws", "12")

    report = json.loads(out.out)
    assert code == 0
    assert len(report["rewards"]) == 12
    assert report["held"]


def test_survey_command_writes_report(capsys, tmp_path):
    output = tmp_path / "survey.json"
    code, out = run_cli(capsys, "survey", "--seed", "neon", "--chunks", "2", "--output", str(output))

    report = json.loads(output.read_text())
    assert code == 0
    assert "Report saved to" in out.out
    assert report["cells"] == 2048
    assert report["height_min"] <= report["height_mean"] <= report["height_max"]
    assert 0.0 < report["hole_ratio"] < 1.0
    assert report["floor_ratio"] >= 1.0 - report["hole_ratio"]


def test_config_option(capsys, tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"height": {"wave_length": 32, "amplitude": 4, "octaves": 1}}))

    code, out = run_cli(capsys, "--config", str(path), "terrain", "--seed", "neon", "--count", "3")

    report = json.loads(out.out)
    assert code == 0
    assert all(0.0 <= cell["height"] < 4.0 for cell in report["cells"])


def test_bad_config_reports_error(capsys, tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"height": {"octaves": 0}}))

    code, out = run_cli(capsys, "--config", str(path), "seed", "--seed", "neon")

    assert code == 2
    assert "Error:" in out.err


def test_upgrades_command_uses_configured_interval(capsys, tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"upgrade_interval": 1.0}))
    code, out = run_cli(capsys, "--config", str(path), "upgrades", "--seed", "neon", "--seconds", "5")

    fast = json.loads(out.out)
    assert code == 0
    assert 0 < len(fast["rewards"]) <= 5
    assert all(label is not None for label in fast["rewards"])

    path.write_text(json.dumps({"upgrade_interval": 999.0}))
    code, out = run_cli(capsys, "--config", str(path), "upgrades", "--seed", "neon", "--seconds", "5")

    assert code == 0
    assert json.loads(out.out)["rewards"] == []

from pathlib import Path

from typer.testing import CliRunner

from catdist import __version__
from catdist.cli import app

runner = CliRunner()


def _parse_table_rows(output: str) -> dict[str, list[str]]:
    rows: dict[str, list[str]] = {}
    for line in output.splitlines():
        if line.startswith("│"):
            cells = [cell.strip() for cell in line.split("│")[1:-1]]
            if cells:
                rows.setdefault(cells[0], cells[1:])
    return rows


def test_registry_command_lists_tables() -> None:
    result = runner.invoke(app, ["registry"])
    assert result.exit_code == 0
    assert "uniform4" in result.stdout
    assert "biased_coin" in result.stdout


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_describe_command_outputs_distribution() -> None:
    result = runner.invoke(app, ["describe", "4", "2.5", "2.5", "1"])
    assert result.exit_code == 0
    rows = _parse_table_rows(result.stdout)
    assert rows["0"] == ["4.0000", "0.4000", "0.4000"]
    assert rows["3"][-1] == "1.0000"
    assert rows["min"] == ["0"]
    assert rows["max"] == ["3"]


def test_describe_registered_table() -> None:
    result = runner.invoke(app, ["describe", "--table", "biased_coin"])
    assert result.exit_code == 0
    rows = _parse_table_rows(result.stdout)
    assert rows["mean"] == ["0.2500"]


def test_describe_requires_weights_or_table() -> None:
    result = runner.invoke(app, ["describe"])
    assert result.exit_code == 1
    result = runner.invoke(app, ["describe", "1", "--table", "uniform4"])
    assert result.exit_code == 1
    result = runner.invoke(app, ["describe", "--table", "missing_table"])
    assert result.exit_code == 1
    assert "missing_table" in result.stdout


def test_describe_rejects_invalid_weights() -> None:
    result = runner.invoke(app, ["describe", "0", "0"])
    assert result.exit_code == 1
    assert "all be zero" in result.stdout


def test_cdf_command() -> None:
    result = runner.invoke(app, ["cdf", "0.8", "4", "2.5", "2.5", "1"])
    assert result.exit_code == 0
    assert "cdf(0.8) = 0.4" in result.stdout


def test_cdf_command_out_of_range() -> None:
    result = runner.invoke(app, ["cdf", "4.5", "4", "2.5", "2.5", "1"])
    assert result.exit_code == 1
    assert "must be in" in result.stdout
    result = runner.invoke(app, ["cdf", "--", "-1", "4", "2.5", "2.5", "1"])
    assert result.exit_code == 1


def test_sample_command_reports_counts() -> None:
    result = runner.invoke(app, ["sample", "1", "0", "3", "--size", "400", "--seed", "5"])
    assert result.exit_code == 0
    rows = _parse_table_rows(result.stdout)
    assert rows["1"][0] == "0"
    assert int(rows["0"][0]) + int(rows["2"][0]) == 400
    assert "Chi^2" in result.stdout


def test_sample_command_linear_search_matches_binary() -> None:
    args = ["sample", "2", "1", "1", "--size", "300", "--seed", "11"]
    binary = runner.invoke(app, args)
    linear = runner.invoke(app, [*args, "--search", "linear"])
    assert binary.exit_code == 0
    assert linear.exit_code == 0
    assert _parse_table_rows(binary.stdout)["0"] == _parse_table_rows(linear.stdout)["0"]


def test_sample_command_rejects_unknown_search() -> None:
    result = runner.invoke(app, ["sample", "1", "1", "--search", "bisect"])
    assert result.exit_code == 1


def test_config_option_registers_tables(tmp_path: Path) -> None:
    config_path = tmp_path / "tables.yaml"
    config_path.write_text(
        "tables:\n  - name: cli_demo\n    weights: [0.0, 0.25, 0.5, 0.25]\n",
        encoding="utf-8",
    )
    result = runner.invoke(
        app, ["describe", "--config", str(config_path), "--table", "cli_demo"]
    )
    assert result.exit_code == 0
    assert _parse_table_rows(result.stdout)["mean"] == ["2.0000"]


def test_cdf_help_explains_negative_points() -> None:
    result = runner.invoke(app, ["cdf", "--help"])
    assert result.exit_code == 0
    assert "negative" in result.stdout

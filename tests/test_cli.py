from __future__ import annotations

import json
from pathlib import Path

import pytest

from promptdial_optimizer.cli import run_cli
from tests.conftest import write_pyproject
from tests.helpers import KNEE_POINT_VARIANTS, make_entry, run_cli_in_tmp, write_request


@pytest.fixture()
def request_document() -> dict:
    return {
        "variants": [
            make_entry("v1", 0.01, 1000, 0.9),
            make_entry("v2", 0.005, 2000, 0.8),
            make_entry("v3", 0.02, 500, 0.85),
        ]
    }


def test_optimize_renders_markdown_by_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict
) -> None:
    source = write_request(tmp_path, request_document)

    output = run_cli_in_tmp(["optimize", str(source)], tmp_path=tmp_path, monkeypatch=monkeypatch)

    assert "| **v1** |" in output
    assert "**Recommended**: v1" in output


def test_optimize_reads_yaml_and_exports_json(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict
) -> None:
    source = write_request(tmp_path, request_document, name="request.yaml")

    output = run_cli_in_tmp(
        ["optimize", str(source), "--export", "json"], tmp_path=tmp_path, monkeypatch=monkeypatch
    )

    payload = json.loads(output)
    assert payload["recommended"]["variant_id"] == "v1"
    assert len(payload["alternatives"]) == 2


def test_mode_flag_overrides_the_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = write_request(
        tmp_path,
        {
            "variants": list(KNEE_POINT_VARIANTS),
            "preferences": {"quality": 1.0},
            "selection_mode": "utility",
        },
    )

    output = run_cli_in_tmp(
        ["optimize", str(source), "--mode", "pareto", "--export", "json"],
        tmp_path=tmp_path,
        monkeypatch=monkeypatch,
    )

    assert json.loads(output)["recommended"]["variant_id"] == "balanced"


def test_repeated_export_flags_are_combined(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict
) -> None:
    source = write_request(tmp_path, request_document)

    output = run_cli_in_tmp(
        ["optimize", str(source), "--export", "csv", "--export", "markdown", "--export", "csv"],
        tmp_path=tmp_path,
        monkeypatch=monkeypatch,
    )

    csv_block, markdown_block = output.split("\n\n", 1)
    assert csv_block.startswith("variant_id,quality,cost,latency,recommended")
    assert markdown_block.lstrip().startswith("| Variant |")


def test_frontier_command_lists_non_dominated_variants(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    source = write_request(
        tmp_path,
        {
            "variants": [
                make_entry("strong", 0.01, 1000, 0.9),
                make_entry("weak", 0.02, 2000, 0.7),
            ]
        },
    )

    output = run_cli_in_tmp(["frontier", str(source)], tmp_path=tmp_path, monkeypatch=monkeypatch)

    lines = output.strip().splitlines()
    assert lines[0] == "variant_id,quality,cost,latency,recommended"
    assert [line.split(",")[0] for line in lines[1:]] == ["strong"]


def test_frontier_command_json_reports_totals(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict
) -> None:
    source = write_request(tmp_path, request_document)

    output = run_cli_in_tmp(
        ["frontier", str(source), "--export", "json"], tmp_path=tmp_path, monkeypatch=monkeypatch
    )

    payload = json.loads(output)
    assert payload["total_variants"] == 3
    assert len(payload["pareto_frontier"]) == 3


def test_demo_command(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    output = run_cli_in_tmp(
        ["demo", "--export", "json"], tmp_path=tmp_path, monkeypatch=monkeypatch
    )

    assert json.loads(output)["recommended"]["variant_id"] == "claude-balanced"


def test_infeasible_request_exits_with_status(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    request_document: dict,
) -> None:
    request_document["constraints"] = {"min_quality": 0.99}
    source = write_request(tmp_path, request_document)

    with pytest.raises(SystemExit) as excinfo:
        run_cli_in_tmp(["optimize", str(source)], tmp_path=tmp_path, monkeypatch=monkeypatch)

    assert excinfo.value.code == 5
    assert "No variants satisfy the given constraints" in capsys.readouterr().out
    log_lines = (tmp_path / "optimizer.log").read_text(encoding="utf8").splitlines()
    errors = [json.loads(line) for line in log_lines if '"ERROR"' in line]
    assert errors[-1]["code"] == "NO_FEASIBLE_SOLUTIONS"


@pytest.mark.parametrize(
    ("contents", "name", "status"),
    [
        (None, "missing.json", 4),
        ("{not json", "broken.json", 3),
        ("- a\n- b\n", "list.yaml", 2),
        ('{"variants": [], "selection_mode": "fastest"}', "mode.json", 2),
    ],
)
def test_bad_request_files_map_to_exit_codes(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    contents: str | None,
    name: str,
    status: int,
) -> None:
    source = tmp_path / name
    if contents is not None:
        source.write_text(contents, encoding="utf8")

    with pytest.raises(SystemExit) as excinfo:
        run_cli_in_tmp(["optimize", str(source)], tmp_path=tmp_path, monkeypatch=monkeypatch)

    assert excinfo.value.code == status


def test_project_config_supplies_settings_and_export(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict
) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.promptdial_optimizer.optimizer]
        max_alternatives = 1

        [tool.promptdial_optimizer.optimize]
        export = "json"
        """,
    )
    source = write_request(tmp_path, request_document)

    output = run_cli_in_tmp(["optimize", str(source)], tmp_path=tmp_path, monkeypatch=monkeypatch)

    payload = json.loads(output)
    assert [entry["variant_id"] for entry in payload["alternatives"]] == ["v3"]


def test_explicit_config_flag(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    write_pyproject(
        config_dir,
        """
        [tool.promptdial_optimizer.optimizer]
        max_alternatives = 0
        """,
    )
    source = write_request(tmp_path, request_document)

    output = run_cli_in_tmp(
        ["--config", str(config_dir / "pyproject.toml"), "optimize", str(source), "--export", "json"],
        tmp_path=tmp_path,
        monkeypatch=monkeypatch,
    )

    assert json.loads(output)["alternatives"] == []


def test_invalid_settings_exit_with_usage_status(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request_document: dict
) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.promptdial_optimizer.optimizer]
        cost_cap_usd = 0
        """,
    )
    source = write_request(tmp_path, request_document)

    with pytest.raises(SystemExit) as excinfo:
        run_cli_in_tmp(["optimize", str(source)], tmp_path=tmp_path, monkeypatch=monkeypatch)

    assert excinfo.value.code == 2


def test_result_is_written_to_stdout(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.delenv("PROMPTDIAL_OPTIMIZER_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    returned = run_cli(["--log-output", str(tmp_path / "cli.log"), "demo", "--export", "json"])

    assert capsys.readouterr().out == returned + "\n"


def test_unknown_log_level_exits_with_usage_status(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_cli_in_tmp(["--log-level", "bogus", "demo"], tmp_path=tmp_path, monkeypatch=monkeypatch)

    assert excinfo.value.code == 2
    assert "Unknown logging level 'bogus'" in capsys.readouterr().out

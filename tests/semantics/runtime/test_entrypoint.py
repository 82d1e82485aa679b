"""
Semantic test: command line entrypoint.

Invariant:
Each command fetches the dataset, applies --all/--hour/--bucket toggles in
order, and reports results; caller errors exit with status 2.
"""

from __future__ import annotations

import json

import pytest

from chunk_manager.runtime.entrypoint import main


@pytest.fixture
def small_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "log_level": "WARNING",
                "event_log_path": str(tmp_path / "events.jsonl"),
                "mock": {"seed": 1, "year": 2024, "month": 3, "day": 5, "hours": 2, "minutes_per_hour": 3},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_summary_reports_selection(small_config, capsys) -> None:
    assert main(["summary", "--config", str(small_config), "--hour", "1", "--bucket", "0:2"]) == 0

    out = capsys.readouterr().out
    assert "Groups: 2" in out
    assert "Selected: 4 chunks" in out
    assert "1:00: all" in out
    assert "0:00: partial" in out


def test_heatmap_prints_legend(small_config, capsys) -> None:
    assert main(["heatmap", "--config", str(small_config), "--all"]) == 0

    out = capsys.readouterr().out
    assert "Legend:" in out
    assert "#1b5e20" in out


def test_download_lists_files(small_config, capsys) -> None:
    assert main(["download", "--config", str(small_config), "--bucket", "1:1"]) == 0

    out = capsys.readouterr().out
    assert "Download URLs: 1" in out
    assert "chunk_2024_03_05_01_01.dat" in out


def test_delete_clears_selection(small_config, capsys, tmp_path) -> None:
    assert main(["delete", "--config", str(small_config), "--all"]) == 0

    out = capsys.readouterr().out
    assert "Delete status: completed" in out
    assert "Remaining selection: 0 chunks" in out

    events = (tmp_path / "events.jsonl").read_text(encoding="utf-8")
    assert "DeleteCompletedEvent" in events


def test_action_without_selection_exits_2(small_config, capsys) -> None:
    assert main(["delete", "--config", str(small_config)]) == 2
    assert "Nothing selected" in capsys.readouterr().err


def test_unknown_bucket_exits_2(small_config, capsys) -> None:
    assert main(["summary", "--config", str(small_config), "--bucket", "0:59"]) == 2
    assert "not part of the current dataset" in capsys.readouterr().err


def test_malformed_bucket_argument_is_a_usage_error(small_config) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["summary", "--config", str(small_config), "--bucket", "noon"])
    assert excinfo.value.code == 2

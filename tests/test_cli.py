from __future__ import annotations

import json
from pathlib import Path

import pytest

from ui import cli


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    sleeps: list[float] = []
    monkeypatch.setattr("core.counting.pacing.time.sleep", sleeps.append)
    return sleeps


def test_cli_prints_sorted_word_counts(tmp_path, capsys) -> None:
    path = tmp_path / "input.txt"
    path.write_text("zebra apple cat\ndog elephant bear\n", encoding="utf-8")

    code = cli.main([str(path)])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == (
        "apple: 1\nbear: 1\ncat: 1\ndog: 1\nelephant: 1\nzebra: 1\n"
    )
    assert captured.err == ""


def test_cli_uses_default_pacing(tmp_path, no_sleep) -> None:
    path = tmp_path / "input.txt"
    path.write_text("a\n" * 25_000, encoding="utf-8")
    assert cli.main([str(path)]) == 0
    assert no_sleep == [0.01, 0.01, 0.01]


def test_cli_flag_overrides(tmp_path, capsys, no_sleep) -> None:
    path = tmp_path / "input.txt"
    path.write_text("b a\na\n", encoding="utf-8")

    code = cli.main([str(path), "--batch-size", "1", "--pause-ms", "0", "--stream", "--summary"])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == "a: 2\nb: 1\n"
    assert "batches=2" in captured.err
    assert no_sleep == []


def test_cli_missing_file_exits_non_zero(tmp_path, capsys) -> None:
    code = cli.main([str(tmp_path / "missing.txt")])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "FILE_OPEN_ERROR" in captured.err


def test_cli_decode_error_emits_no_partial_output(tmp_path, capsys) -> None:
    path = tmp_path / "input.txt"
    path.write_bytes(b"fine words\n" * 100 + b"\xc3\x28\n")
    code = cli.main([str(path), "--batch-size", "10"])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "LINE_READ_ERROR" in captured.err


def test_cli_unknown_profile_is_usage_error(tmp_path, capsys) -> None:
    path = tmp_path / "input.txt"
    path.write_text("a\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main([str(path), "--profile", "nope"])
    assert exc.value.code == 2
    assert "CONFIG_ERROR" in capsys.readouterr().err


def test_cli_writes_progress_log(tmp_path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("x y\n" * 5, encoding="utf-8")
    log_path = tmp_path / "logs" / "progress.jsonl"

    assert cli.main([str(path), "--batch-size", "2", "--progress-log", str(log_path)]) == 0

    events = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [event["event"] for event in events] == ["batch", "batch", "batch", "summary"]
    assert events[-1]["total_words"] == 10
    assert events[-1]["unique_words"] == 2
    assert all("timestamp" in event for event in events)
    assert Path(events[0]["file_path"]) == path


def test_cli_unknown_encoding_is_usage_error(tmp_path, capsys) -> None:
    path = tmp_path / "input.txt"
    path.write_text("a\n", encoding="utf-8")
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "version": 1,
                "global": {"encoding": "nope-enc"},
                "profiles": {"default": {"description": "tmp", "batch_size": 10, "pause_ms": 0}},
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as exc:
        cli.main([str(path), "--config", str(config_path)])
    captured = capsys.readouterr()
    assert exc.value.code == 2
    assert captured.out == ""
    assert "CONFIG_ERROR" in captured.err

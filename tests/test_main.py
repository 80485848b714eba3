"""Tests for the command-line entrypoint."""

from __future__ import annotations

import json

import pytest
import structlog

from face_tension.main import main
from face_tension.models import Frame


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep log lines out of captured output and leave structlog as we found it."""
    monkeypatch.setattr(
        "face_tension.main.setup_logging",
        lambda level: structlog.configure(logger_factory=structlog.ReturnLoggerFactory()),
    )
    yield
    structlog.reset_defaults()


def test_show_config(capsys):
    main(["show-config"])
    out = json.loads(capsys.readouterr().out)
    assert out["alert_sustain_ms"] == 3_000


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1


def test_replay_summary(tmp_path, capsys, neutral_face, tense_face):
    frames = [Frame(timestamp=t, landmarks=neutral_face) for t in range(0, 10_001, 100)]
    frames += [Frame(timestamp=t, landmarks=tense_face) for t in range(10_100, 13_601, 100)]
    path = tmp_path / "session.jsonl"
    path.write_text("\n".join(f.model_dump_json() for f in frames), encoding="utf-8")

    main(["replay", str(path)])

    summary = json.loads(capsys.readouterr().out)
    assert summary["frames"] == len(frames)
    assert summary["baseline_established"] is True
    assert summary["alerts"] == [13_100.0]
    assert summary["channels"] == ["log"]
    assert summary["undelivered"] == []


def test_replay_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["replay", str(tmp_path / "missing.jsonl")])
    assert exc.value.code == 2

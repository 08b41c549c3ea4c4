from __future__ import annotations

import json

import pytest

from eventgen.cli import main
from eventgen.generation.fake import FakeChatCompletionService


def test_viewport_command_prints_center_and_radius(capsys):
    code = main(["viewport", "--far-left", "0", "0", "--near-right", "0", "2"])

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["center_lat"] == 0.0
    assert out["center_lon"] == 1.0
    assert out["radius_km"] == pytest.approx(111.19, abs=0.01)


def test_evaluate_command_accepts(capsys):
    code = main(
        [
            "evaluate",
            "--center-lat", "46.52",
            "--center-lon", "6.63",
            "--radius-km", "2",
            "--last-gen-ms", "0",
            "--now-ms", "1000000",
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"decision": "accept", "events_to_generate": 3}


def test_evaluate_command_rejects_during_cooldown(capsys):
    code = main(
        [
            "evaluate",
            "--center-lat", "46.52",
            "--center-lon", "6.63",
            "--radius-km", "2",
            "--last-gen-ms", "1000",
            "--now-ms", "1001",
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"decision": "reject"}


def _write_user(tmp_path):
    path = tmp_path / "user.json"
    path.write_text(
        json.dumps(
            {
                "uid": "u1",
                "username": "hans",
                "first_name": "Hans",
                "last_name": "P",
                "country": "CH",
                "date_of_birth": "2000-01-01",
                "tags": ["Music"],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_generate_command_with_fake_service(tmp_path, capsys):
    user_path = _write_user(tmp_path)

    code = main(
        [
            "generate",
            "--fake",
            "--user-json", str(user_path),
            "--center-lat", "46.52",
            "--center-lon", "6.63",
            "--radius-km", "2",
            "--now-ms", "1000000",
        ]
    )

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [e["title"] for e in out] == ["Fake Rock Concert"]
    assert out[0]["tags"] == ["Music", "Rock"]


def test_generate_command_respects_existing_events(tmp_path, capsys):
    user_path = _write_user(tmp_path)
    events_path = tmp_path / "events.json"
    events_path.write_text(
        json.dumps(
            [
                {
                    "id": "e1",
                    "title": "Existing",
                    "date": "2025-03-21T20:00:00",
                    "location": {"latitude": 46.52, "longitude": 6.63},
                }
            ]
        ),
        encoding="utf-8",
    )

    code = main(
        [
            "generate",
            "--fake",
            "--user-json", str(user_path),
            "--events-json", str(events_path),
            "--center-lat", "46.52",
            "--center-lon", "6.63",
            "--radius-km", "0.2",
            "--now-ms", "1000000",
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out) == []


def test_generate_command_reports_generation_errors(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        "eventgen.cli.FakeChatCompletionService",
        lambda: FakeChatCompletionService(content="not json"),
    )
    user_path = _write_user(tmp_path)

    code = main(
        [
            "generate",
            "--fake",
            "--user-json", str(user_path),
            "--center-lat", "46.52",
            "--center-lon", "6.63",
            "--radius-km", "2",
            "--now-ms", "1000000",
        ]
    )

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "error: Model output is not valid JSON" in captured.err

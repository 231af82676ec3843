"""Smoke tests for the local FastAPI game API."""

from __future__ import annotations

import json

import pytest
from fastapi import HTTPException

import server.main as main_module
from server.main import (
    acknowledge,
    get_config,
    get_events,
    get_game,
    health,
    new_game,
    next_round,
    press,
    reset,
    restart,
)
from server.schemas import NewGameRequest, PressRequest
from server.session import SessionStore


@pytest.fixture(autouse=True)
def _fresh_store(monkeypatch, tmp_path):
    store = SessionStore(event_log_dir=tmp_path / "logs")
    monkeypatch.setattr(main_module, "store", store)
    return store


def _new_game(payload: dict) -> dict:
    return new_game(NewGameRequest.model_validate(payload))


def _press(game_id: str, color: str) -> dict:
    return press(game_id, PressRequest.model_validate({"color": color}))


def _expect_http_error(fn, expected_status: int):
    try:
        fn()
    except HTTPException as exc:
        assert exc.status_code == expected_status
        return exc.detail
    raise AssertionError("Expected HTTPException to be raised.")


def _wrong_color(color: str) -> str:
    return "blue" if color != "blue" else "red"


def test_health_and_config() -> None:
    assert health() == {"status": "ok"}
    config = get_config()
    assert config["levels"] == {"1": 8, "2": 14, "3": 20, "4": 31}
    assert config["colors"] == ["red", "green", "blue", "yellow"]
    assert config["pacing"]["step_ms"] == 600


def test_game_flow_new_press_next_round_events() -> None:
    created = _new_game({"level": 1, "seed": 123})
    game_id = created["game_id"]

    assert created["phase"] == "PLAYER_TURN"
    assert created["round_count"] == 1
    assert created["max_round_count"] == 8
    assert len(created["computer_sequence"]) == 1
    assert created["playback"][0]["start_ms"] == 0
    assert created["round_label"] == [1, 8]
    assert created["next"] == {"action": "press", "enable_after_ms": 1600}

    pressed = _press(game_id, created["computer_sequence"][0])
    assert pressed["press"]["kind"] == "round_complete"
    assert pressed["phase"] == "COMPUTER_TURN"
    assert pressed["next"]["action"] == "next-round"

    advanced = next_round(game_id)
    assert advanced["phase"] == "PLAYER_TURN"
    assert advanced["computer_sequence"][0] == created["computer_sequence"][0]
    assert len(advanced["playback"]) == 2

    events = get_events(game_id=game_id, format="array")
    assert [event["event_type"] for event in events] == [
        "game_start",
        "computer_turn",
        "press",
        "round_complete",
        "computer_turn",
    ]


def test_same_seed_produces_same_sequence() -> None:
    first = _new_game({"level": 2, "seed": 77})
    second = _new_game({"level": 2, "seed": 77})

    assert first["game_id"] != second["game_id"]
    assert first["computer_sequence"] == second["computer_sequence"]


def test_wrong_press_loses_and_writes_event_log(_fresh_store) -> None:
    created = _new_game({"level": 1, "seed": 5})
    game_id = created["game_id"]

    lost = _press(game_id, _wrong_color(created["computer_sequence"][0]))

    assert lost["phase"] == "ENDED"
    assert lost["press"]["kind"] == "lost"
    assert lost["result"]["outcome"] == "lost"
    assert lost["computer_sequence"] == []
    assert lost["next"] == {"action": "acknowledge"}
    assert any(call["method"] == "announce_end" for call in lost["presentation_calls"])

    log_path = lost["result"]["log_path"]
    assert log_path is not None
    lines = [json.loads(line) for line in open(log_path, encoding="utf-8").read().splitlines()]
    assert lines[-1]["event_type"] == "game_end"

    idle = acknowledge(game_id)
    assert idle["phase"] == "IDLE"

    again = restart(game_id, level=3)
    assert again["max_round_count"] == 20
    assert again["phase"] == "PLAYER_TURN"


def test_illegal_transitions_map_to_409_with_view() -> None:
    created = _new_game({"level": 1, "seed": 9})
    game_id = created["game_id"]

    detail = _expect_http_error(lambda: next_round(game_id), 409)
    assert detail["type"] == "IllegalTransitionError"
    assert detail["view"]["phase"] == "PLAYER_TURN"

    _expect_http_error(lambda: acknowledge(game_id), 409)
    _expect_http_error(lambda: restart(game_id, level=1), 409)

    reset(game_id)
    detail = _expect_http_error(lambda: _press(game_id, "red"), 409)
    assert detail["phase"] == "IDLE"


def test_bad_inputs_map_to_400_and_unknown_games_to_404() -> None:
    detail = _expect_http_error(lambda: _new_game({"level": 5, "seed": 1}), 400)
    assert detail["type"] == "InvalidLevelError"

    created = _new_game({"level": 1, "seed": 2})
    detail = _expect_http_error(lambda: _press(created["game_id"], "purple"), 400)
    assert detail["type"] == "UnknownColorError"
    assert detail["view"]["player_sequence"] == []

    _expect_http_error(lambda: get_game("missing"), 404)
    _expect_http_error(lambda: get_events(game_id="missing", format="array"), 404)


def test_new_game_uses_time_seed_and_env_level(monkeypatch) -> None:
    fake_time_ns = 1_730_000_000_123_456_789
    monkeypatch.setattr(main_module.time, "time_ns", lambda: fake_time_ns)
    monkeypatch.setenv("SIMON_DEFAULT_LEVEL", "4")

    created = _new_game({})

    assert created["seed"] == fake_time_ns & 0x7FFFFFFF
    assert created["max_round_count"] == 31


def test_events_as_jsonl() -> None:
    created = _new_game({"level": 1, "seed": 8})
    response = get_events(game_id=created["game_id"], format="jsonl")

    lines = response.body.decode("utf-8").splitlines()
    assert [json.loads(line)["event_type"] for line in lines] == ["game_start", "computer_turn"]


def test_second_game_in_a_session_gets_its_own_event_log() -> None:
    created = _new_game({"level": 1, "seed": 5})
    game_id = created["game_id"]
    first = _press(game_id, _wrong_color(created["computer_sequence"][0]))
    acknowledge(game_id)

    again = restart(game_id, level=1)
    second = _press(game_id, _wrong_color(again["computer_sequence"][0]))

    first_log = first["result"]["log_path"]
    second_log = second["result"]["log_path"]
    assert first_log != second_log
    second_types = [json.loads(line)["event_type"] for line in open(second_log, encoding="utf-8").read().splitlines()]
    assert second_types.count("game_start") == 1
    assert second_types == ["game_start", "computer_turn", "press", "game_end"]
    assert second["result"]["event_count"] == 4

    history = get_events(game_id=game_id, format="array")
    assert [event["event_type"] for event in history].count("game_start") == 2


def test_restart_without_level_uses_env_default(monkeypatch) -> None:
    created = _new_game({"level": 1, "seed": 3})
    game_id = created["game_id"]
    reset(game_id)
    monkeypatch.setenv("SIMON_DEFAULT_LEVEL", "2")

    again = restart(game_id, level=None)

    assert again["level"] == 2
    assert again["max_round_count"] == 14


def test_player_turn_delay_only_accompanies_playback() -> None:
    created = _new_game({"level": 1, "seed": 11})
    game_id = created["game_id"]
    assert created["next"] == {"action": "press", "enable_after_ms": 1600}

    polled = get_game(game_id)
    assert polled["playback"] is None
    assert polled["next"] == {"action": "press", "enable_after_ms": 0}

    _press(game_id, created["computer_sequence"][0])
    advanced = next_round(game_id)
    assert advanced["next"] == {"action": "press", "enable_after_ms": 2 * 600 + 1000}
    assert get_game(game_id)["next"]["enable_after_ms"] == 0

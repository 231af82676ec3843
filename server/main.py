"""FastAPI server exposing a local single-player Simon Says API for a browser UI."""

from __future__ import annotations

import time
from typing import Any, Callable

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from gamekit.env_utils import getenv_any, getenv_int
from gamekit.errors import GameError, IllegalTransitionError
from gamekit.serialize import json_dumps
from server.schemas import NewGameRequest, PressRequest
from server.session import GameSession, SessionStore
from simon.simon_config import DEFAULT_LEVEL

app = FastAPI(title="Simon Says Local API", version="0.1.0")
store = SessionStore(event_log_dir=getenv_any("SIMON_EVENT_LOG_DIR"))

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""
    return {"status": "ok"}


@app.get("/api/config")
def get_config() -> dict[str, Any]:
    """Level table, pad colors and pacing the UI should use."""
    return store.config.to_dict()


def _time_based_seed() -> int:
    """Generate a positive time-derived seed when client does not provide one."""
    seed = int(time.time_ns() & 0x7FFFFFFF)
    return seed if seed != 0 else 1


def _session_or_404(game_id: str) -> GameSession:
    try:
        return store.get(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown game_id: {game_id}") from exc


def _apply(session: GameSession, action: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    """Run a controller action, translating rejected transitions into HTTP errors."""
    try:
        return action()
    except IllegalTransitionError as exc:
        raise HTTPException(status_code=409, detail={**exc.to_dict(), "view": session.view()}) from exc
    except GameError as exc:
        raise HTTPException(status_code=400, detail={**exc.to_dict(), "view": session.view()}) from exc


@app.post("/api/game/new")
def new_game(request: NewGameRequest) -> dict[str, Any]:
    """Create a session, start the requested level and play the first computer turn."""
    seed = request.seed if request.seed is not None else _time_based_seed()
    level = request.level if request.level is not None else getenv_int("SIMON_DEFAULT_LEVEL", default=DEFAULT_LEVEL)
    try:
        session = store.create_game(level=level, seed=seed)
    except GameError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    return session.view()


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> dict[str, Any]:
    """Current state of one session."""
    return _session_or_404(game_id).view()


@app.post("/api/game/{game_id}/press")
def press(game_id: str, request: PressRequest) -> dict[str, Any]:
    """Forward a pad press to the round controller."""
    session = _session_or_404(game_id)
    return _apply(session, lambda: session.press(request.color))


@app.post("/api/game/{game_id}/next-round")
def next_round(game_id: str) -> dict[str, Any]:
    """Play the next computer turn once the UI's pacing delay has elapsed."""
    session = _session_or_404(game_id)
    return _apply(session, session.next_round)


@app.post("/api/game/{game_id}/acknowledge")
def acknowledge(game_id: str) -> dict[str, Any]:
    """Dismiss the end-of-game announcement."""
    session = _session_or_404(game_id)
    return _apply(session, session.acknowledge)


@app.post("/api/game/{game_id}/start")
def restart(game_id: str, level: int | None = Query(default=None)) -> dict[str, Any]:
    """Start another game in an idle session."""
    session = _session_or_404(game_id)
    if level is None:
        level = getenv_int("SIMON_DEFAULT_LEVEL", default=DEFAULT_LEVEL)
    return _apply(session, lambda: session.restart(level))


@app.post("/api/game/{game_id}/reset")
def reset(game_id: str) -> dict[str, Any]:
    """Abandon the current game and return the session to idle."""
    session = _session_or_404(game_id)
    return _apply(session, session.reset)


@app.get("/api/game/{game_id}/events", response_model=None)
def get_events(game_id: str, format: str = Query(default="array")) -> Any:
    """Return full event history as array (default) or JSONL text."""
    try:
        events = store.all_events(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown game_id: {game_id}") from exc

    if format == "jsonl":
        text = "\n".join(json_dumps(event) for event in events)
        return PlainTextResponse(content=text, media_type="application/jsonl")
    return events


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.main:app", host="127.0.0.1", port=8000, reload=True)

"""Pydantic request schemas for the local game API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NewGameRequest(BaseModel):
    """Request body for starting a new game session."""

    level: int | None = None
    seed: int | None = Field(default=None, ge=0)


class PressRequest(BaseModel):
    """Request body for a single pad press."""

    color: str

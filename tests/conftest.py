from __future__ import annotations

import os

import pytest

from src.engine.models import Player, PlayerId


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Drop HIVE_* variables and any local .env so settings fall back to defaults."""
    for key in list(os.environ):
        if key.upper().startswith("HIVE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def players() -> list[Player]:
    return [
        Player(player_id=PlayerId("p1"), display_name="Alice", seat_index=0),
        Player(player_id=PlayerId("p2"), display_name="Bob", seat_index=1),
    ]

"""Configuration loading tests."""

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from styleboard_app.config import (
    DEFAULT_BOARD_IDLE_SECONDS,
    DEFAULT_BOARD_NAME,
    DEFAULT_MAX_OPEN_BOARDS,
    StyleBoardConfig,
)

_KEYS = [
    "APP_ENV",
    "APP_CONFIG_PATH",
    "WARDROBE_DB_PATH",
    "STYLE_CARD_DB_PATH",
    "OUTFIT_NAMER_URL",
    "OUTFIT_NAMER_TIMEOUT",
    "DEFAULT_BOARD_NAME",
    "SHUFFLE_SEED",
    "MAX_OPEN_BOARDS",
    "BOARD_IDLE_SECONDS",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = StyleBoardConfig.from_env()
    assert config.wardrobe_db_path == "data/wardrobe.db"
    assert config.outfit_namer_url is None
    assert config.default_board_name == DEFAULT_BOARD_NAME
    assert config.shuffle_seed is None
    assert config.max_open_boards == DEFAULT_MAX_OPEN_BOARDS
    assert config.board_idle_seconds == DEFAULT_BOARD_IDLE_SECONDS
    assert config.environment is None


def test_yaml_file_with_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging\n"
        "outfit_namer_url: \"http://stylist.internal:8000/api/name-outfit\"\n"
        "outfit_namer_timeout: 2.5\n"
        "shuffle_seed: 17\n"
        "default_board_name: 'Staging Board'\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("STYLEBOARD_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("SHUFFLE_SEED", "4")

    config = StyleBoardConfig.from_env()
    assert config.environment == "staging"
    assert config.outfit_namer_url == "http://stylist.internal:8000/api/name-outfit"
    assert config.outfit_namer_timeout == 2.5
    assert config.default_board_name == "Staging Board"
    assert config.shuffle_seed == 4


def test_board_limits_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_OPEN_BOARDS", "12")
    monkeypatch.setenv("BOARD_IDLE_SECONDS", "90")
    config = StyleBoardConfig.from_env()
    assert config.max_open_boards == 12
    assert config.board_idle_seconds == 90.0

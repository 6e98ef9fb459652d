"""Configuration helpers for the Style Board service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_BOARD_NAME = "My Style Board"
DEFAULT_MAX_OPEN_BOARDS = 256
DEFAULT_BOARD_IDLE_SECONDS = 1800.0


@dataclass
class StyleBoardConfig:
    """Configuration values for the Style Board service.

    Everything the composer needs from its surroundings (where the wardrobe
    lives, which endpoint names outfits) is passed in here rather than looked
    up from global session state.
    """

    wardrobe_db_path: str = "data/wardrobe.db"
    style_card_db_path: str = "data/style_cards.db"
    outfit_namer_url: Optional[str] = None
    outfit_namer_timeout: float = 10.0
    default_board_name: str = DEFAULT_BOARD_NAME
    shuffle_seed: Optional[int] = None
    max_open_boards: int = DEFAULT_MAX_OPEN_BOARDS
    board_idle_seconds: float = DEFAULT_BOARD_IDLE_SECONDS
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "StyleBoardConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default; environment variables win over file values.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLEBOARD_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        timeout = get_value("outfit_namer_timeout")
        seed = get_value("shuffle_seed")
        max_boards = get_value("max_open_boards")
        idle_seconds = get_value("board_idle_seconds")

        return cls(
            wardrobe_db_path=str(get_value("wardrobe_db_path") or "data/wardrobe.db"),
            style_card_db_path=str(get_value("style_card_db_path") or "data/style_cards.db"),
            outfit_namer_url=get_value("outfit_namer_url") or None,
            outfit_namer_timeout=float(timeout) if timeout else 10.0,
            default_board_name=str(get_value("default_board_name") or DEFAULT_BOARD_NAME),
            shuffle_seed=int(seed) if seed not in (None, "") else None,
            max_open_boards=int(max_boards) if max_boards else DEFAULT_MAX_OPEN_BOARDS,
            board_idle_seconds=float(idle_seconds) if idle_seconds else DEFAULT_BOARD_IDLE_SECONDS,
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config

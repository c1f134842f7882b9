"""Конфигурация приложения."""
import os
from functools import lru_cache
from pathlib import Path

FIRST_PLAYER_POLICIES = ("random", "arrival", "waiter")

_default_assets = Path(__file__).resolve().parent.parent.parent / "assets"


@lru_cache
def get_config():
    first_player = os.environ.get("FIRST_PLAYER", "random").lower()
    if first_player not in FIRST_PLAYER_POLICIES:
        first_player = "random"
    return type("Config", (), {
        "host": os.environ.get("HOST", "127.0.0.1"),
        "port": int(os.environ.get("PORT", "3000")),
        "debug": os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes"),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "poll_interval": int(os.environ.get("POLL_INTERVAL_MS", "300")) / 1000,
        "first_player": first_player,
        "assets_dir": Path(os.environ.get("ASSETS_DIR", str(_default_assets))),
    })()

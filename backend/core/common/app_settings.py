from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


@dataclass(frozen=True)
class AppSettings:
    app_name: str
    auto_reload: bool
    port: int
    debug: bool
    log_level: str
    log_file: str
    session_file: str


def load_app_settings() -> AppSettings:
    return AppSettings(
        app_name=os.getenv("APP_NAME", "article-board"),
        auto_reload=_as_bool(os.getenv("AUTO_RELOAD"), False),
        port=_as_int(os.getenv("PORT"), 38001),
        debug=_as_bool(os.getenv("DEBUG"), False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE", "./data/logs/article-board.log"),
        session_file=os.getenv("SESSION_FILE", "data/session.json"),
    )


settings = load_app_settings()

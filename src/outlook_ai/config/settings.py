from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env once, globally
load_dotenv()

# Project root (independent of current working directory).
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def resolve_dir(env_key: str, default: str) -> Path:
    """
    Resolve a directory path from ENV.
    Relative paths are resolved against PROJECT_ROOT.
    """
    value = os.getenv(env_key, default)
    path = Path(value)

    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


@dataclass(frozen=True)
class Settings:
    enable_ai_analysis: bool = False
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    ai_timeout_seconds: float = 30.0
    batch_max_size: int = 20
    batch_concurrency: int = 5
    batch_pause_seconds: float = 1.0
    log_level: str = "INFO"
    cors_origin: str = "*"
    secrets_dir: Path = PROJECT_ROOT / "secrets"

    @property
    def ai_available(self) -> bool:
        return self.enable_ai_analysis and bool(self.openai_api_key)


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid boolean %s=%r, using %s", key, raw, default)
    return default


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid integer %s=%r, using %s", key, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r, using %s", key, raw, default)
        return default
    return value


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid number %s=%r, using %s", key, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %s", key, raw, default)
        return default
    return value


def load_openai_api_key(secrets_dir: Path) -> Optional[str]:
    """
    OPENAI_API_KEY wins; otherwise read an uploaded token file from the
    secrets directory (openai_token.txt or openai_token.json).
    """
    env_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if env_key:
        return env_key

    txt_path = secrets_dir / "openai_token.txt"
    if txt_path.exists():
        try:
            token = txt_path.read_text(encoding="utf-8").strip()
        except UnicodeDecodeError:
            return None
        return token or None

    json_path = secrets_dir / "openai_token.json"
    if json_path.exists():
        try:
            payload = json.loads(json_path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None
        if not isinstance(payload, dict):
            return None
        # Prefer explicit key names, then generic token key.
        candidates = [
            payload.get("api_key"),
            payload.get("openai_api_key"),
            payload.get("token"),
        ]
        for candidate in candidates:
            if isinstance(candidate, str):
                token = candidate.strip()
                if token:
                    return token
        return None

    return None


def load_settings() -> Settings:
    secrets_dir = resolve_dir("OUTLOOK_AI_SECRETS_DIR", "secrets")
    return Settings(
        enable_ai_analysis=_env_bool("ENABLE_AI_ANALYSIS", False),
        openai_api_key=load_openai_api_key(secrets_dir),
        openai_model=(os.getenv("OPENAI_MODEL") or "gpt-4.1-mini").strip(),
        ai_timeout_seconds=_env_float("AI_TIMEOUT_SECONDS", 30.0),
        batch_max_size=_env_int("BATCH_MAX_SIZE", 20),
        batch_concurrency=_env_int("BATCH_CONCURRENCY", 5),
        batch_pause_seconds=_env_float("BATCH_PAUSE_SECONDS", 1.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        cors_origin=(os.getenv("CORS_ORIGIN") or "*").strip(),
        secrets_dir=secrets_dir,
    )

"""
Environment configuration for the catalog API.

- HOST / PORT: bind address for uvicorn (default 0.0.0.0:3000)
- API_KEY: shared secret expected in the x-api-key header
- LOG_LEVEL / LOG_FORMAT: handed to catalog_api.log.configure_logging by create_app
Loads .env from the project root when available.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

_ROOT = Path(__file__).resolve().parent.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_API_KEY = "mysecretapikey"
API_KEY_HEADER = "x-api-key"


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_key: str = DEFAULT_API_KEY
    log_level: str = "INFO"
    log_format: str = "json"


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """Build Settings from the environment after loading .env. Safe to call multiple times."""
    load_dotenv(env_file or _ENV_PATH)
    return Settings(
        host=(os.getenv("HOST") or DEFAULT_HOST).strip(),
        port=_env_int("PORT", DEFAULT_PORT),
        api_key=os.getenv("API_KEY") or DEFAULT_API_KEY,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        log_format=(os.getenv("LOG_FORMAT") or "json").strip().lower(),
    )

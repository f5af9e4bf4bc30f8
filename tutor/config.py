from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    api_url: str
    access_token: str | None
    timeout_s: float
    max_retries: int
    normalize_math: bool


def _env_flag(name: str, default: bool) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def load_settings() -> Settings:
    api_url = (os.environ.get("TUTOR_API_URL") or "http://localhost:8000").strip().rstrip("/")

    access_token = (os.environ.get("TUTOR_ACCESS_TOKEN") or "").strip()
    # Tokens pasted from a shell often keep their quotes (set TUTOR_ACCESS_TOKEN="ey...").
    if (access_token.startswith('"') and access_token.endswith('"')) or (access_token.startswith("'") and access_token.endswith("'")):
        access_token = access_token[1:-1].strip()

    timeout_s = float(os.environ.get("TUTOR_API_TIMEOUT_S", "60"))
    max_retries = int(os.environ.get("TUTOR_API_MAX_RETRIES", "2"))

    return Settings(
        api_url=api_url,
        access_token=access_token or None,
        timeout_s=timeout_s,
        max_retries=max(0, max_retries),
        normalize_math=_env_flag("TUTOR_NORMALIZE_MATH", True),
    )

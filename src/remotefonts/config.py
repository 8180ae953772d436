from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidConfiguration
from .util.http import DEFAULT_USER_AGENT


class AppSettings(BaseModel):
    cache_dir: Optional[Path] = Field(default=None)
    out_dir: Path = Field(default=Path("fonts"))
    logs_dir: Path = Field(default=Path("logs"))
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    timeout: Optional[float] = Field(default=None, gt=0)
    allow_error_status: bool = Field(default=False)
    parallel: bool = Field(default=False)
    max_workers: int = Field(default=8, ge=1)
    log_level: str = Field(default="INFO")


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _env_optional(key: str) -> Optional[str]:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return None
    return value


def _cli_or_env_bool(cli_value: Any | None, env_key: str, default: bool) -> bool:
    if cli_value is not None:
        return bool(cli_value)
    return _env_bool(env_key, default)


def load_settings(cli_args: dict[str, Any] | None = None) -> AppSettings:
    load_dotenv()
    cli_args = cli_args or {}

    cache_dir = cli_args.get("cache_dir") or _env_optional("FONT_CACHE_DIR")

    data: dict[str, Any] = {
        "cache_dir": Path(cache_dir).expanduser() if cache_dir else None,
        "out_dir": Path(cli_args.get("out_dir") or os.getenv("OUT_DIR", "fonts")).expanduser(),
        "logs_dir": Path(cli_args.get("logs_dir") or os.getenv("LOGS_DIR", "logs")).expanduser(),
        "user_agent": cli_args.get("user_agent") or os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        "timeout": cli_args.get("timeout") or _env_optional("HTTP_TIMEOUT"),
        "allow_error_status": _cli_or_env_bool(cli_args.get("allow_error_status"), "ALLOW_ERROR_STATUS", False),
        "parallel": _cli_or_env_bool(cli_args.get("parallel"), "PARALLEL", False),
        "max_workers": cli_args.get("max_workers") or os.getenv("MAX_WORKERS", 8),
        "log_level": (cli_args.get("log_level") or os.getenv("LOG_LEVEL", "INFO")).upper(),
    }

    try:
        return AppSettings(**data)
    except ValidationError as exc:
        raise InvalidConfiguration(f"Invalid configuration: {exc}") from exc

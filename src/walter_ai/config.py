"""
Client configuration — token and endpoint URL.

Read from ``~/.walter/config.json`` with ``WALTER_TOKEN`` / ``WALTER_URL``
taking precedence.
"""

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ValidationError, field_validator

from walter_ai.errors import ConfigError
from walter_ai.transport.http import DEFAULT_BASE_URL

CONFIG_FILE = Path.home() / ".walter" / "config.json"
TOKEN_ENV = "WALTER_TOKEN"  # noqa: S105
URL_ENV = "WALTER_URL"


class WalterConfig(BaseModel):
    token: str
    url: str = DEFAULT_BASE_URL

    @field_validator("token")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("token must not be empty")
        return value

    @field_validator("url", mode="before")
    @classmethod
    def _http_url(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_BASE_URL
        trimmed = value.strip().rstrip("/")
        parsed = urlparse(trimmed)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"'{value}' is not a valid http or https URL")
        return trimmed


def read_config_file(path: Optional[Path] = None) -> dict[str, Any]:
    path = path or CONFIG_FILE
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read Walter config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Walter config {path} must hold a JSON object")
    return data


def save_config(cfg: dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg, indent=2))


def load_config(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> WalterConfig:
    """Merge the config file with the environment and validate the result."""
    env = os.environ if env is None else env
    raw = read_config_file(path)
    if env.get(TOKEN_ENV):
        raw["token"] = env[TOKEN_ENV]
    if env.get(URL_ENV):
        raw["url"] = env[URL_ENV]
    if not raw.get("token"):
        raise ConfigError(
            f"Walter requires an API token. Set {TOKEN_ENV} or run `walter config set --token ...`"
        )
    try:
        return WalterConfig.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise ConfigError(f"Invalid Walter config '{field}': {first['msg']}") from e

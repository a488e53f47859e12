from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - HOST: bind address for the development server (default: 0.0.0.0)
    - PORT: bind port (default: 3000)
    - STATIC_DIR: directory holding the single-page front-end (default: ./views)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - ENABLE_AUTH: 'true' to require a valid bearer token on /todo (default: false)
    - AUTH0_DOMAIN: identity provider domain, e.g. 'example.eu.auth0.com'
    - AUTH0_API_AUDIENCE: expected 'aud' claim of incoming tokens
    - LOG_FORMAT: 'console' (default) or 'json'
    - LOG_LEVEL: minimum log level name (default: INFO)
    """

    host: str
    port: int
    static_dir: str
    cors_allow_origins: List[str]
    enable_auth: bool
    auth0_domain: Optional[str]
    auth0_api_audience: Optional[str]
    log_format: str
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_port(value: str, default: int) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_format = _get_env("LOG_FORMAT", "console").strip().lower()
    if log_format not in {"console", "json"}:
        log_format = "console"

    return Settings(
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_port(_get_env("PORT", "3000"), 3000),
        static_dir=_get_env("STATIC_DIR", "./views").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        enable_auth=_parse_bool(_get_env("ENABLE_AUTH", "false"), False),
        auth0_domain=_optional_env("AUTH0_DOMAIN"),
        auth0_api_audience=_optional_env("AUTH0_API_AUDIENCE"),
        log_format=log_format,
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )

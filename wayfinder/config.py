"""Runtime settings read from environment variables.

Env vars:
  WAYFINDER_BUILDING_PATH=/path/to/building.json   (bundled demo building when unset)
  WAYFINDER_TRANSITION_PENALTY=20
  WAYFINDER_GRAPH_CACHE=true|false
  WAYFINDER_CORS_ORIGINS=*|https://a.example,https://b.example
  WAYFINDER_LOG_LEVEL=INFO
  API_HOST=0.0.0.0
  API_PORT=8000
  API_RELOAD=true|false

A local ``.env`` file may supply any of these; real environment values win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from wayfinder.route_graph import DEFAULT_TRANSITION_PENALTY


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def load_env_file(path: str | Path = ".env") -> dict[str, str]:
    """Export ``KEY=value`` lines of ``path`` that are not already set.

    Blank lines, ``#`` comments and lines without ``=`` are skipped; one layer
    of surrounding quotes is stripped from values.

    Returns:
        The variables that were exported.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    exported: dict[str, str] = {}
    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if not key or key in os.environ:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        os.environ[key] = value
        exported[key] = value
    return exported


@dataclass(slots=True)
class Settings:
    """Resolved configuration for one app instance."""

    building_path: str = ""
    transition_penalty: float = DEFAULT_TRANSITION_PENALTY
    graph_cache: bool = True
    cors_origins: str = "*"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        raw_penalty = os.getenv("WAYFINDER_TRANSITION_PENALTY", "").strip()
        try:
            penalty = float(raw_penalty) if raw_penalty else DEFAULT_TRANSITION_PENALTY
        except ValueError as exc:
            raise ValueError("WAYFINDER_TRANSITION_PENALTY must be a number") from exc
        if penalty < 0:
            raise ValueError("WAYFINDER_TRANSITION_PENALTY must be >= 0")

        raw_port = os.getenv("API_PORT", "").strip()
        try:
            port = int(raw_port) if raw_port else 8000
        except ValueError as exc:
            raise ValueError("API_PORT must be an integer") from exc
        if not 0 < port < 65536:
            raise ValueError("API_PORT must be between 1 and 65535")

        return cls(
            building_path=os.getenv("WAYFINDER_BUILDING_PATH", "").strip(),
            transition_penalty=penalty,
            graph_cache=_env_bool("WAYFINDER_GRAPH_CACHE", True),
            cors_origins=os.getenv("WAYFINDER_CORS_ORIGINS", "*").strip() or "*",
            log_level=os.getenv("WAYFINDER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            api_host=os.getenv("API_HOST", "").strip() or "0.0.0.0",
            api_port=port,
            api_reload=_env_bool("API_RELOAD", False),
        )

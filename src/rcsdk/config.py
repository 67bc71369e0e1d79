from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SANDBOX_SERVER = "https://platform.devtest.ringcentral.com"
PRODUCTION_SERVER = "https://platform.ringcentral.com"

SERVER_ALIASES = {
    "sandbox": SANDBOX_SERVER,
    "production": PRODUCTION_SERVER,
}

RCSDK_DIR = os.path.expanduser(os.getenv("RCSDK_HOME", "~/.rcsdk"))
CONFIG_PATH = os.path.join(RCSDK_DIR, "config.json")


def resolve_server(value: str) -> str:
    """Return the platform URL for ``value``, expanding ``sandbox``/``production`` aliases."""

    normalized = value.strip()
    alias = SERVER_ALIASES.get(normalized.lower())
    if alias:
        return alias
    if not normalized:
        raise ValueError("Server must not be empty")
    return normalized.rstrip("/")


@dataclass
class ClientSettings:
    server: str = SANDBOX_SERVER
    timeout: float = 60.0
    max_retries: int = 2
    backoff_factor: float = 0.5


_SETTING_NAMES = frozenset(f.name for f in fields(ClientSettings))


class ConfigStore:
    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path else Path(CONFIG_PATH)

    def _ensure(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed config at %s", self.path)
            return {}
        return raw

    def load(self, *, apply_env: bool = True) -> ClientSettings:
        """Return stored settings.

        ``RCSDK_SERVER`` overrides the stored server unless ``apply_env`` is
        ``False``; pass ``False`` when the result is going to be saved back.
        """

        raw = self._read()
        settings = ClientSettings(**{k: v for k, v in raw.items() if k in _SETTING_NAMES})
        server_override = os.getenv("RCSDK_SERVER")
        if apply_env and server_override:
            settings.server = resolve_server(server_override)
        return settings

    def save(self, settings: ClientSettings) -> None:
        self._ensure()
        tmp = self.path.with_suffix(".tmp")
        with tmp.open("w", encoding="utf-8") as handle:
            json.dump(asdict(settings), handle, indent=2)
        tmp.replace(self.path)


__all__ = [
    "CONFIG_PATH",
    "ClientSettings",
    "ConfigStore",
    "PRODUCTION_SERVER",
    "SANDBOX_SERVER",
    "resolve_server",
]

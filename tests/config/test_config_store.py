from __future__ import annotations

import json
from pathlib import Path

import pytest

from rcsdk.config import (
    PRODUCTION_SERVER,
    SANDBOX_SERVER,
    ClientSettings,
    ConfigStore,
    resolve_server,
)


@pytest.fixture(autouse=True)
def _clear_server_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RCSDK_SERVER", raising=False)


def test_load_missing_file_returns_defaults(tmp_path: Path) -> None:
    store = ConfigStore(path=tmp_path / "config.json")

    settings = store.load()

    assert settings == ClientSettings()
    assert settings.server == SANDBOX_SERVER
    assert not store.path.exists()


def test_save_then_load(tmp_path: Path) -> None:
    store = ConfigStore(path=tmp_path / "nested" / "config.json")

    store.save(ClientSettings(server=PRODUCTION_SERVER, timeout=5.0, max_retries=4))
    settings = store.load()

    assert settings.server == PRODUCTION_SERVER
    assert settings.timeout == 5.0
    assert settings.max_retries == 4
    assert not store.path.with_suffix(".tmp").exists()


def test_load_ignores_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server": "https://custom.example", "cache_prefix": "rc"}), encoding="utf-8")

    settings = ConfigStore(path=path).load()

    assert settings.server == "https://custom.example"
    assert not hasattr(settings, "cache_prefix")


def test_load_malformed_payload_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert ConfigStore(path=path).load() == ClientSettings()


def test_environment_overrides_server(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = ConfigStore(path=tmp_path / "config.json")
    store.save(ClientSettings(server="https://stored.example"))
    monkeypatch.setenv("RCSDK_SERVER", "production")

    assert store.load().server == PRODUCTION_SERVER


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("sandbox", SANDBOX_SERVER),
        ("Production", PRODUCTION_SERVER),
        ("https://platform.example/", "https://platform.example"),
    ],
)
def test_resolve_server(value: str, expected: str) -> None:
    assert resolve_server(value) == expected


def test_resolve_server_rejects_empty() -> None:
    with pytest.raises(ValueError):
        resolve_server("  ")


def test_load_without_env_keeps_stored_server(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = ConfigStore(path=tmp_path / "config.json")
    store.save(ClientSettings(server="https://stored.example"))
    monkeypatch.setenv("RCSDK_SERVER", "production")

    settings = store.load(apply_env=False)
    settings.timeout = 5.0
    store.save(settings)
    monkeypatch.delenv("RCSDK_SERVER")

    reloaded = store.load()
    assert reloaded.server == "https://stored.example"
    assert reloaded.timeout == 5.0

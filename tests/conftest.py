from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest
import respx
from typer.testing import CliRunner


# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


BATCH_BOUNDARY = "batch_123"
BATCH_CONTENT_TYPE = f"multipart/mixed; boundary={BATCH_BOUNDARY}"


def _batch_body(*parts: str, boundary: str = BATCH_BOUNDARY, newline: str = "\n") -> str:
    lines: list[str] = []
    for part in parts:
        lines.append(f"--{boundary}")
        lines.append(part)
    lines.append(f"--{boundary}--")
    lines.append("")
    return "\n".join(lines).replace("\n", newline)


@pytest.fixture
def batch_body() -> Callable[..., str]:
    """Join raw segments into a multipart/mixed batch body."""

    return _batch_body


@pytest.fixture
def batch_content_type() -> str:
    return BATCH_CONTENT_TYPE


@pytest.fixture
def token_getter():
    return lambda: "dummy-token"


@pytest.fixture
def respx_mock():
    with respx.mock(assert_all_called=False) as respx_mgr:
        yield respx_mgr


@pytest.fixture
def cli_runner(monkeypatch):
    """Provide a CLI runner with a dummy access token."""

    monkeypatch.setenv("RCSDK_ACCESS_TOKEN", "test-token")
    monkeypatch.delenv("RCSDK_SERVER", raising=False)
    return CliRunner()

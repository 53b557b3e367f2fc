from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture()
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def reporter(output: io.StringIO):
    from scanner.reporter import Reporter

    return Reporter(output)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    # Keep a developer's .env or exported variables out of the tests.
    monkeypatch.chdir(tmp_path)
    for name in ["LOG_LEVEL", "SCANNER_ADDRESS", "SCANNER_PORT", "MAX_DATAGRAM_SIZE", "REUSE_PORT"]:
        monkeypatch.delenv(name, raising=False)

    from config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

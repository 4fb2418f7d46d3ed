# ruff: noqa: E402

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import grouprefresh.log as grouprefresh_log


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "GROUPREFRESH_LOG_LEVEL",
        "GROUPREFRESH_NO_COLOR",
        "GROUPREFRESH_EXPERIMENTS",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    grouprefresh_log.reset()
    yield
    grouprefresh_log.reset()

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from supermarkdown.settings import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SUPERMARKDOWN_CONFIG_PATH", raising=False)
    monkeypatch.delenv("SUPERMARKDOWN_ENABLE_LOCAL_API", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

from __future__ import annotations

from pathlib import Path

import pytest

from tests.utils import RecordingTransport


@pytest.fixture
def store_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "store.json"
    monkeypatch.setenv("EMBEDCOMPARE_STORE_PATH", str(path))
    return path


@pytest.fixture
def cat_dog_transport() -> RecordingTransport:
    return RecordingTransport({"cat": [1.0, 0.0], "dog": [0.0, 1.0]})

"""Runtime settings resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path

from embedcompare.embeddings.openai import DEFAULT_BASE_URL, DEFAULT_MODEL

DEFAULT_STORE_PATH = Path("~/.embedcompare/store.json")
MODES = ("remote", "mock")


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 60.0
    mode: str = "remote"
    store_path: Path = DEFAULT_STORE_PATH
    log_level: str = "WARNING"

    def with_overrides(self, **changes: object) -> "Settings":
        updates = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **updates)

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "base_url": self.base_url,
            "timeout_s": self.timeout_s,
            "mode": self.mode,
            "store_path": str(self.store_path),
            "log_level": self.log_level,
        }


def load_settings() -> Settings:
    mode = os.getenv("EMBEDCOMPARE_MODE", "remote").strip().lower()
    if mode not in MODES:
        raise ValueError(f"EMBEDCOMPARE_MODE must be one of {', '.join(MODES)}, got {mode!r}.")
    timeout_raw = os.getenv("EMBEDCOMPARE_TIMEOUT_S", "60")
    try:
        timeout_s = float(timeout_raw)
    except ValueError as exc:
        raise ValueError(f"EMBEDCOMPARE_TIMEOUT_S must be a number, got {timeout_raw!r}.") from exc
    return Settings(
        model=os.getenv("EMBEDCOMPARE_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
        timeout_s=timeout_s,
        mode=mode,
        store_path=Path(os.getenv("EMBEDCOMPARE_STORE_PATH", str(DEFAULT_STORE_PATH))).expanduser(),
        log_level=os.getenv("EMBEDCOMPARE_LOG_LEVEL", "WARNING"),
    )

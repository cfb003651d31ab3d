# File: audiochain/core/config/settings.py

import os
import shutil
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


class Settings:
    # --- Database (edit journal) ---
    @property
    def DATABASE_URL(self) -> str:
        return os.getenv("AUDIOCHAIN_DATABASE_URL", "sqlite:///./audiochain.db")

    # --- External Tools ---
    # Auto-detect ffmpeg/ffprobe or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # None means an invocation runs until the engine exits
    ENGINE_TIMEOUT_SECONDS: Optional[float] = _optional_float("ENGINE_TIMEOUT_SECONDS")

    # How many trailing stderr lines end up in a failure diagnostic
    STDERR_TAIL_LINES: int = int(os.getenv("STDERR_TAIL_LINES", "20"))

    # --- Output naming ---
    # "prefix": seeked_<name> next to the source (outputs are clobbered)
    # "unique": same, plus a numeric suffix when the name is already taken
    OUTPUT_NAMING: str = os.getenv("OUTPUT_NAMING", "prefix").lower()


settings = Settings()

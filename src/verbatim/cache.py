"""File-based caching of speech recognition results."""

import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

CACHE_DIR = Path(os.environ.get("VERBATIM_CACHE_DIR", "~/.cache/verbatim")).expanduser()


def file_hash(path: Path) -> str:
    """Compute SHA-256 hash of a file's contents."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def atomic_write(target: Path, data: bytes) -> None:
    """Write data to target atomically via temp file + rename."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, target)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def _transcription_cache_path(audio_hash: str, model: str, language: str) -> Path:
    return CACHE_DIR / "whisper" / f"{audio_hash}_{model}_{language}.json"


def get_cached_transcription(
    audio_hash: str, model: str, language: str
) -> list[dict] | None:
    """Return cached word dicts, or None if not cached."""
    path = _transcription_cache_path(audio_hash, model, language)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            words = data["words"]
            logger.info(f"Cache hit: transcription ({audio_hash[:12]}...)")
            return words
        except (json.JSONDecodeError, OSError, KeyError):
            return None
    return None


def store_transcription_cache(
    audio_hash: str, model: str, language: str, words: list[dict]
) -> None:
    """Store recognized word dicts in the cache."""
    path = _transcription_cache_path(audio_hash, model, language)
    atomic_write(path, json.dumps({"words": words}, ensure_ascii=False).encode("utf-8"))
    logger.info(f"Cached transcription ({audio_hash[:12]}...)")

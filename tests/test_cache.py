"""Tests for the cache module."""

import json

import pytest

from verbatim.cache import (
    atomic_write,
    file_hash,
    get_cached_transcription,
    store_transcription_cache,
)


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path, monkeypatch):
    """Redirect cache to tmp_path so tests don't pollute the real cache."""
    monkeypatch.setattr("verbatim.cache.CACHE_DIR", tmp_path / "cache")


# --- file_hash ---


def test_file_hash_deterministic(tmp_path):
    f = tmp_path / "data.bin"
    f.write_bytes(b"hello world")
    h1 = file_hash(f)
    assert h1 == file_hash(f)
    assert len(h1) == 64  # SHA-256 hex


def test_file_hash_different_content(tmp_path):
    f1 = tmp_path / "a.bin"
    f2 = tmp_path / "b.bin"
    f1.write_bytes(b"hello")
    f2.write_bytes(b"world")
    assert file_hash(f1) != file_hash(f2)


# --- atomic_write ---


def test_atomic_write_creates_parents(tmp_path):
    target = tmp_path / "nested" / "dir" / "out.json"
    atomic_write(target, b"{}")
    assert target.read_bytes() == b"{}"


def test_atomic_write_replaces(tmp_path):
    target = tmp_path / "out.txt"
    atomic_write(target, b"first")
    atomic_write(target, b"second")
    assert target.read_bytes() == b"second"
    assert list(tmp_path.glob("*.tmp")) == []


# --- Transcription cache ---

WORDS = [
    {"word": "rabbit", "start": 0.0, "end": 0.5, "probability": 0.42},
    {"word": "ɹed", "start": 0.6, "end": 0.9, "probability": None},
]


def test_transcription_cache_miss():
    assert get_cached_transcription("nohash", "base", "en") is None


def test_transcription_cache_roundtrip():
    store_transcription_cache("abc123", "base", "en", WORDS)
    assert get_cached_transcription("abc123", "base", "en") == WORDS


def test_transcription_cache_keyed_by_model_and_language():
    store_transcription_cache("abc123", "base", "en", WORDS)
    assert get_cached_transcription("abc123", "small", "en") is None
    assert get_cached_transcription("abc123", "base", "es") is None


def test_transcription_cache_corrupt(tmp_path):
    path = tmp_path / "cache" / "whisper" / "bad_base_en.json"
    path.parent.mkdir(parents=True)
    path.write_text("not json")
    assert get_cached_transcription("bad", "base", "en") is None


def test_transcription_cache_missing_key(tmp_path):
    path = tmp_path / "cache" / "whisper" / "old_base_en.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"text": "hello"}))
    assert get_cached_transcription("old", "base", "en") is None

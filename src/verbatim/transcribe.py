"""Whisper ASR with word-level timestamps and confidences."""

import logging
from pathlib import Path

from verbatim.types import WordEvent

logger = logging.getLogger(__name__)

_model_cache: dict[str, object] = {}


def _load_model(model_name: str):
    """Load (once per process) a Whisper model by size name."""
    if model_name not in _model_cache:
        import whisper
        logger.info(f"Loading Whisper model: {model_name}")
        _model_cache[model_name] = whisper.load_model(model_name)
    return _model_cache[model_name]


def _words_from_result(result: dict) -> list[dict]:
    """Flatten Whisper segments into word dicts, stripping whitespace."""
    words = []
    for segment in result.get("segments", []):
        for w in segment.get("words", []):
            text = w["word"].strip()
            if not text:
                continue
            words.append({
                "word": text,
                "start": w["start"],
                "end": w["end"],
                "probability": w.get("probability"),
            })
    return words


def transcribe(
    audio_path: Path,
    model_name: str = "base",
    language: str = "en",
    use_cache: bool = False,
) -> list[WordEvent]:
    """Transcribe audio into word events.

    Whisper's per-word probability is used as the recognition confidence.

    Args:
        audio_path: Path to the audio file.
        model_name: Whisper model size.
        language: Language code.
        use_cache: Whether to check/store the transcription cache.

    Returns:
        One WordEvent per recognized word, in time order.
    """
    audio_hash = None
    words = None
    if use_cache:
        from verbatim.cache import file_hash, get_cached_transcription
        audio_hash = file_hash(audio_path)
        words = get_cached_transcription(audio_hash, model_name, language)

    if words is None:
        model = _load_model(model_name)
        result = model.transcribe(
            str(audio_path),
            word_timestamps=True,
            language=language,
        )
        words = _words_from_result(result)
        if use_cache:
            from verbatim.cache import store_transcription_cache
            store_transcription_cache(audio_hash, model_name, language, words)

    logger.info(f"Transcribed {len(words)} words from {audio_path.name}")
    return [
        WordEvent(
            text=w["word"],
            confidence=w.get("probability"),
            start=w["start"],
            end=w["end"],
        )
        for w in words
    ]

"""CLI entrypoint for verbatim: subcommand dispatcher."""

import argparse
import logging
import sys
import warnings
from pathlib import Path

from verbatim.confidence import DEFAULT_FLAG_THRESHOLD
from verbatim.errors import VerbatimError
from verbatim.types import ErrorPattern, Session, WordStatus

logger = logging.getLogger("verbatim.cli")


def _add_store_args(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every subcommand that reads or writes sessions."""
    parser.add_argument("--session-dir", type=Path, default=None,
                        help="Session storage directory (default: $VERBATIM_SESSION_DIR "
                             "or ~/.local/share/verbatim/sessions)")


def _add_analysis_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--aligner", default="positional",
                        choices=["positional", "edit"],
                        help="Phoneme alignment strategy (default: positional)")


def _add_verbose(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Debug logging and dependency warnings (default: quiet)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="verbatim",
        description="Phonological error analysis for transcribed speech",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze = subparsers.add_parser(
        "analyze", help="Suggest error patterns for one expected/produced pair",
    )
    analyze.add_argument("expected", help="Expected phonetic, e.g. '/ɹ æ b ɪ t/'")
    analyze.add_argument("produced", help="Produced phonetic, e.g. '/w æ b ɪ t/'")
    _add_analysis_args(analyze)
    _add_verbose(analyze)

    lookup = subparsers.add_parser("lookup", help="Show expected pronunciations")
    lookup.add_argument("words", nargs="+")
    lookup.add_argument("--g2p", action="store_true", default=False,
                        help="Fall back to g2p_en for words not in the dictionary")
    _add_verbose(lookup)

    patterns = subparsers.add_parser("patterns", help="List error patterns")
    _add_verbose(patterns)

    transcribe = subparsers.add_parser(
        "transcribe", help="Transcribe audio into a new review session",
    )
    transcribe.add_argument("audio", type=Path, help="Audio file to transcribe")
    transcribe.add_argument("--student", default="", help="Student name")
    transcribe.add_argument("--threshold", type=float, default=DEFAULT_FLAG_THRESHOLD,
                            help=f"Flag words below this confidence (default: {DEFAULT_FLAG_THRESHOLD})")
    transcribe.add_argument("--whisper-model", default="base",
                            choices=["tiny", "base", "small", "medium"],
                            help="Whisper model size (default: base)")
    transcribe.add_argument("--language", default="en", help="Language code (default: en)")
    transcribe.add_argument("--seed", type=int, default=None,
                            help="RNG seed for simulated produced phonetics")
    transcribe.add_argument("--g2p", action="store_true", default=False,
                            help="Fall back to g2p_en for words not in the dictionary")
    transcribe.add_argument("--no-cache", action="store_true", default=False,
                            help="Disable caching of transcription results")
    _add_analysis_args(transcribe)
    _add_store_args(transcribe)
    _add_verbose(transcribe)

    sessions = subparsers.add_parser("sessions", help="List saved sessions")
    _add_store_args(sessions)
    _add_verbose(sessions)

    summary = subparsers.add_parser("summary", help="Show a session's review state")
    summary.add_argument("session_id")
    _add_store_args(summary)
    _add_verbose(summary)

    confirm = subparsers.add_parser("confirm", help="Confirm a suggested error")
    confirm.add_argument("session_id")
    confirm.add_argument("word_id")
    confirm.add_argument("suggestion_id")
    confirm.add_argument("--phonetic", default=None, help="Clinician transcription")
    _add_store_args(confirm)
    _add_verbose(confirm)

    custom = subparsers.add_parser("custom", help="Record a clinician-classified error")
    custom.add_argument("session_id")
    custom.add_argument("word_id")
    custom.add_argument("--phonetic", required=True, help="Clinician transcription")
    custom.add_argument("--pattern", default=ErrorPattern.CUSTOM.value,
                        choices=[p.value for p in ErrorPattern],
                        help="Error pattern (default: custom)")
    _add_store_args(custom)
    _add_verbose(custom)

    dismiss = subparsers.add_parser("dismiss", help="Mark a flagged word as error-free")
    dismiss.add_argument("session_id")
    dismiss.add_argument("word_id")
    _add_store_args(dismiss)
    _add_verbose(dismiss)

    remove = subparsers.add_parser("remove", help="Remove a confirmed error")
    remove.add_argument("session_id")
    remove.add_argument("error_id")
    _add_store_args(remove)
    _add_verbose(remove)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _open_store(args: argparse.Namespace):
    from verbatim.store import SessionStore
    return SessionStore(args.session_dir)


def _load_or_fail(store, session_id: str) -> Session:
    session = store.load(session_id)
    if session is None:
        _fail(f"session not found: {session_id}")
    return session


def _print_summary(session: Session) -> None:
    from verbatim.phonology.patterns import developmental_norm

    print(f"Session {session.id}")
    print(f"Student: {session.student_name or '-'}")
    print(f"Date: {session.date:%Y-%m-%d %H:%M}")
    print(f"Words: {session.total_words}")
    for status, count in session.status_counts.items():
        print(f"  {status.value}: {count}")
    print(f"Confirmed errors: {session.confirmed_errors_count}")
    for pattern, count in session.sorted_pattern_counts():
        norm = developmental_norm(pattern)
        print(f"  {pattern.display_name}: {count}" + (f" ({norm})" if norm else ""))

    flagged = [w for w in session.transcription if w.status == WordStatus.FLAGGED]
    if flagged:
        print("Awaiting review:")
    for word in flagged:
        print(f"  {word.id}  {word.text!r} at {word.start_time:.2f}s "
              f"(confidence {word.confidence:.2f}) expected {word.expected_phonetic or '?'}")
        for s in word.suggested_errors:
            print(f"    {s.id}  /{s.target}/ -> /{s.produced}/ {s.pattern.display_name}")
    for e in session.confirmed_errors:
        print(f"  confirmed {e.id}  {e.word!r} at {e.timestamp:.2f}s: "
              f"/{e.target}/ -> /{e.produced}/ ({e.pattern.display_name})")


def _run_analyze(args: argparse.Namespace) -> None:
    from verbatim.phonology.patterns import analyze_errors

    errors = analyze_errors(args.expected, args.produced, aligner=args.aligner)
    if not errors:
        print("No classifiable errors")
    for e in errors:
        print(f"/{e.target}/ -> /{e.produced}/  {e.pattern.display_name}: "
              f"{e.pattern.description}")


def _run_lookup(args: argparse.Namespace) -> None:
    from verbatim.phonology.pronunciation import PronunciationDictionary

    dictionary = PronunciationDictionary(use_g2p=args.g2p)
    for word in args.words:
        print(f"{word}\t{dictionary.lookup(word) or '(not found)'}")


def _run_patterns(args: argparse.Namespace) -> None:
    from verbatim.phonology.patterns import developmental_norm, intervention_suggestions

    for pattern in ErrorPattern:
        print(f"{pattern.value}: {pattern.display_name}")
        print(f"  {pattern.description}")
        norm = developmental_norm(pattern)
        if norm:
            print(f"  Norm: {norm}")
        for suggestion in intervention_suggestions(pattern):
            print(f"  - {suggestion}")


def _run_transcribe(args: argparse.Namespace) -> None:
    from verbatim.phonology.pronunciation import PronunciationDictionary
    from verbatim.session.ledger import SessionLedger
    from verbatim.session.transcription import SimulatedProducer, build_words
    from verbatim.transcribe import transcribe

    if not args.audio.exists():
        _fail(f"file not found: {args.audio}")

    events = transcribe(
        args.audio,
        model_name=args.whisper_model,
        language=args.language,
        use_cache=not args.no_cache,
    )
    words = build_words(
        events,
        dictionary=PronunciationDictionary(use_g2p=args.g2p),
        threshold=args.threshold,
        producer=SimulatedProducer(seed=args.seed),
        aligner=args.aligner,
    )

    ledger = SessionLedger()
    ledger.start_new_session(student_name=args.student)
    ledger.replace_transcription(words)
    ledger.set_duration(max((w.end_time for w in words), default=0.0))
    session = ledger.set_audio_path(str(args.audio.resolve()))

    path = _open_store(args).save(session)
    logger.info(f"Session written to {path}")
    _print_summary(session)


def _run_sessions(args: argparse.Namespace) -> None:
    for session in _open_store(args).list_sessions():
        print(f"{session.id}  {session.date:%Y-%m-%d}  {session.student_name or '-'}  "
              f"{session.total_words} words, {session.flagged_words_count} flagged, "
              f"{session.confirmed_errors_count} confirmed")


def _run_summary(args: argparse.Namespace) -> None:
    _print_summary(_load_or_fail(_open_store(args), args.session_id))


def _run_review(args: argparse.Namespace) -> None:
    """Apply one clinician action to a stored session and save it."""
    from verbatim.session.ledger import SessionLedger

    store = _open_store(args)
    ledger = SessionLedger(_load_or_fail(store, args.session_id))

    if args.command == "confirm":
        session = ledger.confirm(args.word_id, args.suggestion_id, args.phonetic)
    elif args.command == "custom":
        session = ledger.confirm_custom(
            args.word_id, args.phonetic, ErrorPattern(args.pattern),
        )
    elif args.command == "dismiss":
        session = ledger.dismiss(args.word_id)
    else:
        session = ledger.remove(args.error_id)

    store.save(session)
    print(f"{args.command}: ok ({session.confirmed_errors_count} confirmed, "
          f"{session.flagged_words_count} flagged)")


_COMMANDS = {
    "analyze": _run_analyze,
    "lookup": _run_lookup,
    "patterns": _run_patterns,
    "transcribe": _run_transcribe,
    "sessions": _run_sessions,
    "summary": _run_summary,
    "confirm": _run_review,
    "custom": _run_review,
    "dismiss": _run_review,
    "remove": _run_review,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    if not args.verbose:
        # Silence noisy third-party warnings
        warnings.filterwarnings("ignore", message="FP16 is not supported on CPU")
        logging.getLogger("numba").setLevel(logging.ERROR)
        logging.getLogger("nltk").setLevel(logging.ERROR)

    try:
        _COMMANDS[args.command](args)
    except VerbatimError as e:
        _fail(str(e))


if __name__ == "__main__":
    main()

"""JSON file persistence for review sessions."""

import json
import logging
import os
from pathlib import Path

from verbatim.cache import atomic_write
from verbatim.types import Session

logger = logging.getLogger(__name__)

SESSION_DIR = Path(
    os.environ.get("VERBATIM_SESSION_DIR", "~/.local/share/verbatim/sessions")
).expanduser()


def save_session(session: Session, path: Path) -> Path:
    """Write one session snapshot to path."""
    data = json.dumps(session.to_dict(), ensure_ascii=False, indent=2)
    atomic_write(path, data.encode("utf-8"))
    return path


def load_session(path: Path) -> Session | None:
    """Read a session snapshot, or None if missing or unreadable."""
    if not path.exists():
        return None
    try:
        return Session.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, OSError, KeyError, ValueError,
            TypeError, AttributeError) as e:
        logger.warning(f"Failed to load session {path.name}: {e}")
        return None


class SessionStore:
    """Directory of sessions, one JSON file per session id."""

    def __init__(self, root: Path | None = None):
        self.root = Path(root) if root is not None else SESSION_DIR

    def path_for(self, session_id: str) -> Path:
        return self.root / f"{session_id}.json"

    def save(self, session: Session) -> Path:
        path = save_session(session, self.path_for(session.id))
        logger.info(f"Saved session {session.id} ({session.total_words} words)")
        return path

    def load(self, session_id: str) -> Session | None:
        return load_session(self.path_for(session_id))

    def list_sessions(self) -> list[Session]:
        """All readable sessions, newest first."""
        if not self.root.exists():
            return []
        sessions = []
        for path in sorted(self.root.glob("*.json")):
            session = load_session(path)
            if session is not None:
                sessions.append(session)
        sessions.sort(key=lambda s: s.date, reverse=True)
        return sessions

    def delete(self, session_id: str) -> bool:
        """Delete a stored session. Returns False if it did not exist."""
        path = self.path_for(session_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted session {session_id}")
        return True

from __future__ import annotations  # Session storage with per-session serialization

import logging
import os
import threading
import weakref
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Dict, Iterator, List, Optional, Protocol

from config.settings import settings
from observability import log_event

from .errors import InvalidStateError, NotFoundError
from .models import Session, utcnow


logger = logging.getLogger(__name__)


class SessionRepository(Protocol):  # Backing storage for sessions
    def load(self, session_id: str) -> Optional[Session]: ...

    def save(self, session: Session) -> None: ...

    def delete(self, session_id: str) -> bool: ...

    def list_ids(self) -> List[str]: ...


class InMemorySessionRepository:  # Process-local repository
    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._lock = RLock()

    def load(self, session_id: str) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session is not None else None

    def save(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.id] = session.model_copy(deep=True)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions.keys())


class JsonCheckpointRepository:  # One JSON file per session, written atomically
    def __init__(self, base_dir: Path | str) -> None:
        self.base_dir = Path(base_dir)

    def _path(self, session_id: str) -> Path:
        safe = "".join(ch for ch in session_id if ch.isalnum() or ch in "-_")
        if not safe or safe != session_id:
            raise NotFoundError(session_id)
        return self.base_dir / f"{safe}.json"

    def load(self, session_id: str) -> Optional[Session]:
        path = self._path(session_id)
        if not path.exists():
            return None
        return Session.model_validate_json(path.read_text(encoding="utf-8"))

    def save(self, session: Session) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(session.id)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(session.model_dump_json(by_alias=True))
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)

    def delete(self, session_id: str) -> bool:
        path = self._path(session_id)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list_ids(self) -> List[str]:
        if not self.base_dir.exists():
            return []
        return sorted(path.stem for path in self.base_dir.glob("*.json"))


def build_repository() -> SessionRepository:
    if settings.CHECKPOINT_DIR:
        logger.info("Persisting sessions to %s", settings.CHECKPOINT_DIR)
        return JsonCheckpointRepository(settings.CHECKPOINT_DIR)
    return InMemorySessionRepository()


def advance_session(session: Session) -> None:
    """Move past the current question, completing the session at the end."""

    session.current_question_index += 1
    if session.current_question_index >= session.total_questions:
        session.status = "completed"
        session.end_time = utcnow()


class SessionStore:
    """Owns session lifecycle; every mutation of one session id is serialized.

    Different session ids use different locks and never contend. A lock lives
    only while some caller holds it, so unknown ids leave nothing behind.
    Callers get deep copies, so a returned Session can be read or modified freely.
    """

    def __init__(self, repository: Optional[SessionRepository] = None) -> None:
        self._repository = repository if repository is not None else build_repository()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, session_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[session_id] = lock
        return lock

    def _load(self, session_id: str) -> Session:
        session = self._repository.load(session_id)
        if session is None:
            raise NotFoundError(session_id)
        return session

    @contextmanager
    def transaction(self, session_id: str) -> Iterator[Session]:
        """Yield a working copy under the session lock; persist it if the block succeeds."""

        with self._lock_for(session_id):
            session = self._load(session_id)
            yield session
            self._repository.save(session)

    def create(self, session: Session) -> Session:
        with self._lock_for(session.id):
            self._repository.save(session)
        return session.model_copy(deep=True)

    def get(self, session_id: str) -> Session:
        with self._lock_for(session_id):
            return self._load(session_id)

    def pause(self, session_id: str) -> bool:
        with self.transaction(session_id) as session:
            if session.status != "active":
                raise InvalidStateError(f"Cannot pause a {session.status} interview", expected="active")
            session.status = "paused"
        log_event("session_paused", session_id, status="paused")
        return True

    def resume(self, session_id: str) -> bool:
        with self.transaction(session_id) as session:
            if session.status != "paused":
                raise InvalidStateError(f"Cannot resume a {session.status} interview", expected="paused")
            session.status = "active"
        log_event("session_resumed", session_id, status="active")
        return True

    def advance(self, session_id: str) -> Session:
        with self.transaction(session_id) as session:
            if session.status != "active":
                raise InvalidStateError(f"Cannot advance a {session.status} interview", expected="active")
            advance_session(session)
            snapshot = session.model_copy(deep=True)
        return snapshot

    def delete(self, session_id: str) -> bool:
        with self._lock_for(session_id):
            removed = self._repository.delete(session_id)
        with self._locks_guard:
            self._locks.pop(session_id, None)
        return removed

    def stats(self) -> Dict[str, int]:
        counts = {"total": 0, "active": 0, "paused": 0, "completed": 0}
        for session_id in self._repository.list_ids():
            session = self._repository.load(session_id)
            if session is None:
                continue
            counts["total"] += 1
            counts[session.status] += 1
        return counts


__all__ = [
    "SessionRepository",
    "InMemorySessionRepository",
    "JsonCheckpointRepository",
    "build_repository",
    "advance_session",
    "SessionStore",
]

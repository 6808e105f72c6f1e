"""
Session Storage Module
=======================
Thread-safe session store for accumulated intelligence records.

Implements the collaborator contract the engine relies on:

    get(session_id) -> Optional[IntelligenceRecord]
    put(session_id, record) -> None

and keeps a running message count per session next to the record:

    {"<session_id>": {"intelligence": {...}, "totalMessages": 3}}

Records live in memory. When a file path is configured, every write also
persists all sessions to JSON using an atomic write (write to temp, then
replace), and the file is loaded once on first access.

The lock protects the store's own map only. It does NOT make a
get → merge → put cycle atomic; serializing writers per session is the
caller's job.
"""

import json
import logging
import os
from threading import Lock
from typing import Dict, Optional

from pydantic import ValidationError

from scamintel import config
from scamintel.schemas import IntelligenceRecord

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory session store with optional JSON file persistence.

    Args:
        path: JSON file backing the store; empty or None keeps it in memory
    """

    def __init__(self, path: Optional[str] = config.SESSION_FILE):
        self.path = path or None
        self._lock = Lock()
        self._cache: Optional[Dict[str, dict]] = None

    # ---------- LOAD ----------

    def _load(self) -> Dict[str, dict]:
        """
        Load sessions — from memory first, disk only on cold start.

        A malformed file (bad encoding, bad JSON, or JSON that is not an
        object) is logged and replaced by an empty store instead of
        crashing the caller.
        """
        if self._cache is not None:
            return self._cache

        if not self.path or not os.path.exists(self.path):
            self._cache = {}
            return self._cache

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"{self.path} corrupted ({e}) — starting with empty sessions")
            data = {}

        if not isinstance(data, dict):
            logger.warning(f"{self.path} is not a JSON object — starting with empty sessions")
            data = {}

        self._cache = data
        return self._cache

    # ---------- ATOMIC FILE WRITE ----------

    def _save(self, sessions: Dict[str, dict]) -> None:
        if not self.path:
            return

        temp_file = self.path + ".tmp"
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(sessions, f, separators=(",", ":"), ensure_ascii=False)
            os.replace(temp_file, self.path)
        except OSError as e:
            logger.error(f"Failed to save sessions to {self.path}: {e}")
            raise

    def _entry(self, sessions: Dict[str, dict], session_id: str) -> dict:
        entry = sessions.get(session_id)
        if not isinstance(entry, dict):
            entry = {"intelligence": None, "totalMessages": 0}
            sessions[session_id] = entry
        return entry

    # ---------- CONTRACT ----------

    def get(self, session_id: str) -> Optional[IntelligenceRecord]:
        """
        Return the session's accumulated record, or None if unknown.

        A stored record that no longer validates is logged and treated
        as missing; the next put replaces it.
        """
        with self._lock:
            entry = self._load().get(session_id)
        if not isinstance(entry, dict) or entry.get("intelligence") is None:
            return None
        try:
            return IntelligenceRecord.model_validate(entry["intelligence"])
        except ValidationError as e:
            logger.warning(f"Discarding invalid record for session {session_id}: {e.error_count()} errors")
            return None

    def put(self, session_id: str, record: IntelligenceRecord) -> None:
        """Store (and persist, if file-backed) the session's record."""
        with self._lock:
            sessions = self._load()
            self._entry(sessions, session_id)["intelligence"] = record.model_dump(mode="json")
            self._save(sessions)

    # ---------- MESSAGE COUNT ----------

    def message_count(self, session_id: str) -> int:
        with self._lock:
            entry = self._load().get(session_id)
        count = entry.get("totalMessages", 0) if isinstance(entry, dict) else 0
        return count if isinstance(count, int) and count >= 0 else 0

    def add_messages(self, session_id: str, count: int) -> int:
        """
        Add to the session's message count and return the new total.

        Args:
            session_id: Conversation identifier
            count: Messages processed since the last call

        Returns:
            Messages seen by the session across all runs
        """
        with self._lock:
            sessions = self._load()
            entry = self._entry(sessions, session_id)
            previous = entry.get("totalMessages", 0)
            if not isinstance(previous, int) or previous < 0:
                previous = 0
            entry["totalMessages"] = previous + count
            self._save(sessions)
            return entry["totalMessages"]

    def delete(self, session_id: str) -> None:
        with self._lock:
            sessions = self._load()
            if sessions.pop(session_id, None) is not None:
                self._save(sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._load()

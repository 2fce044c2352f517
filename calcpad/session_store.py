# session_store.py
"""""
Saved documents, kept in one JSON file:

    {"next_id": 3, "sessions": [{"id": 1, "name": ..., "content": ..., "variables": {...}, "created_at": ...}, ...]}

Ids start at 1 and are never reused, even after a delete.
"""""

import json
import logging
from datetime import datetime
from pathlib import Path

from . import error as E

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, path):
        self.path = Path(path)

    # --- 1. File access ---

    def _load(self):
        if not self.path.exists():
            return {"next_id": 1, "sessions": []}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise E.StorageError(f"Session file could not be read: {e}", code="6001")

        if not isinstance(data, dict) or not isinstance(data.get("sessions"), list):
            raise E.StorageError("Session file could not be read: unexpected layout", code="6001")
        data.setdefault("next_id", max((s["id"] for s in data["sessions"]), default=0) + 1)
        return data

    def _save(self, data):
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4)
        except OSError as e:
            raise E.StorageError(f"Session file could not be written: {e}", code="6002")

    # --- 2. CRUD ---

    def create(self, name, content, variables=None):
        """Store a new session and return its record (with the assigned id)."""
        data = self._load()
        record = {
            "id": data["next_id"],
            "name": name,
            "content": content,
            "variables": variables or {},
            "created_at": datetime.now().isoformat(timespec="seconds"),
        }
        data["sessions"].append(record)
        data["next_id"] += 1
        self._save(data)
        logger.info("Saved session %d (%s)", record["id"], name)
        return record

    def get(self, session_id):
        for record in self._load()["sessions"]:
            if record["id"] == session_id:
                return record
        raise E.StorageError(f"Session not found: {session_id}", code="6000")

    def list(self):
        return list(self._load()["sessions"])

    def delete(self, session_id):
        """Remove a session; False if there was nothing to remove."""
        data = self._load()
        remaining = [record for record in data["sessions"] if record["id"] != session_id]
        if len(remaining) == len(data["sessions"]):
            return False
        data["sessions"] = remaining
        self._save(data)
        logger.info("Deleted session %d", session_id)
        return True

"""JSON document backend.

The whole database is one JSON document kept in memory and rewritten in full
after every mutation. Writes go to a temporary file that is then renamed over
the existing file, so a crash never leaves a half-written document. A single
re-entrant lock serializes every read-modify-write cycle.

Document layout::

    {
      "users": [
        {"id": 1, "name": ..., "email": ..., "password_hash": ..., "created_at": ...,
         "categories": [...], "tasks": [...], "time_blocks": [...],
         "pomodoro_sessions": [...], "settings": {...},
         "next_ids": {"categories": 6, "tasks": 1, ...}}
      ],
      "next_ids": {"users": 2}
    }
"""
import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from timemaster import clock
from timemaster.errors import Conflict, InternalFault, NotFound
from timemaster.store.base import (
    COLLECTIONS,
    DEFAULT_CATEGORIES,
    DEFAULT_SETTINGS,
    Store,
    UserAccount,
    fields_for,
    normalize_email,
    prepare_import,
    setting_value,
    shape_record,
    writable_fields,
)

logger = logging.getLogger(__name__)


def _empty_document() -> dict[str, Any]:
    return {"users": [], "next_ids": {"users": 1}}


class JsonStore(Store):
    backend_name = "json"

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.RLock()
        self._data = self._load()
        self._save()
        logger.info("JsonStore ready path=%s users=%d", self._path, len(self._data["users"]))

    # ---- persistence ----

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return _empty_document()
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            corrupt = self._path.with_name(self._path.name + ".corrupt")
            logger.warning("Corrupt database file %s, moved to %s and starting fresh", self._path, corrupt)
            os.replace(self._path, corrupt)
            return _empty_document()
        data.setdefault("users", [])
        data.setdefault("next_ids", {})
        data["next_ids"].setdefault("users", 1)
        return data

    def _save(self) -> None:
        """Persist the document; on a write failure, fall back to what is on disk."""
        try:
            self._write()
        except OSError as exc:
            logger.error("Could not write %s: %s", self._path, exc)
            self._data = self._load()
            raise InternalFault("Could not write the database file") from exc

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    # ---- helpers ----

    def _user_doc(self, user_id: int) -> dict[str, Any]:
        for doc in self._data["users"]:
            if doc["id"] == user_id:
                return doc
        raise NotFound("User not found")

    @staticmethod
    def _account(doc: dict[str, Any]) -> UserAccount:
        return UserAccount(
            id=doc["id"],
            name=doc["name"],
            email=doc["email"],
            password_hash=doc["password_hash"],
            created_at=doc["created_at"],
        )

    @staticmethod
    def _next_id(doc: dict[str, Any], collection: str) -> int:
        counters = doc.setdefault("next_ids", {})
        next_id = counters.get(collection, 1)
        counters[collection] = next_id + 1
        return next_id

    def _collection(self, user_id: int, collection: str) -> list[dict[str, Any]]:
        fields_for(collection)
        return self._user_doc(user_id).setdefault(collection, [])

    # ---- identity ----

    def create_user(self, name: str, email: str, password_hash: str) -> UserAccount:
        with self._lock:
            if self.find_user_by_email(email) is not None:
                raise Conflict("This email is already registered")
            user_id = self._data["next_ids"]["users"]
            self._data["next_ids"]["users"] = user_id + 1
            stamp = clock.timestamp()
            categories = [
                shape_record("categories", i, cat, stamp)
                for i, cat in enumerate(DEFAULT_CATEGORIES, start=1)
            ]
            doc = {
                "id": user_id,
                "name": name,
                "email": normalize_email(email),
                "password_hash": password_hash,
                "created_at": stamp,
                "categories": categories,
                "tasks": [],
                "time_blocks": [],
                "pomodoro_sessions": [],
                "settings": dict(DEFAULT_SETTINGS),
                "next_ids": {
                    "categories": len(categories) + 1,
                    "tasks": 1,
                    "time_blocks": 1,
                    "pomodoro_sessions": 1,
                },
            }
            self._data["users"].append(doc)
            self._save()
            logger.info("Created user %s (%s)", user_id, doc["email"])
            return self._account(doc)

    def find_user_by_email(self, email: str) -> Optional[UserAccount]:
        wanted = normalize_email(email)
        with self._lock:
            for doc in self._data["users"]:
                if doc["email"] == wanted:
                    return self._account(doc)
        return None

    def get_user_by_id(self, user_id: int) -> Optional[UserAccount]:
        with self._lock:
            try:
                return self._account(self._user_doc(user_id))
            except NotFound:
                return None

    # ---- records ----

    def list_all(self, user_id: int, collection: str) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._collection(user_id, collection))

    def get_by_id(self, user_id: int, collection: str, record_id: int) -> Optional[dict[str, Any]]:
        with self._lock:
            for record in self._collection(user_id, collection):
                if record["id"] == record_id:
                    return copy.deepcopy(record)
        return None

    def insert(self, user_id: int, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            items = self._collection(user_id, collection)
            doc = self._user_doc(user_id)
            record = shape_record(
                collection,
                self._next_id(doc, collection),
                writable_fields(collection, fields),
                clock.timestamp(),
            )
            items.append(record)
            self._save()
            logger.info("Inserted %s #%s for user %s", collection, record["id"], user_id)
            return copy.deepcopy(record)

    def update(
        self, user_id: int, collection: str, record_id: int, fields: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        with self._lock:
            for record in self._collection(user_id, collection):
                if record["id"] == record_id:
                    record.update(writable_fields(collection, fields))
                    record["updated_at"] = clock.timestamp()
                    self._save()
                    logger.debug("Updated %s #%s for user %s", collection, record_id, user_id)
                    return copy.deepcopy(record)
        return None

    def remove(self, user_id: int, collection: str, record_id: int) -> None:
        with self._lock:
            items = self._collection(user_id, collection)
            kept = [r for r in items if r["id"] != record_id]
            if len(kept) == len(items):
                return
            items[:] = kept
            self._save()
            logger.info("Deleted %s #%s for user %s", collection, record_id, user_id)

    # ---- settings ----

    def get_settings(self, user_id: int) -> dict[str, str]:
        with self._lock:
            stored = self._user_doc(user_id).get("settings") or {}
            return {**DEFAULT_SETTINGS, **stored}

    def update_settings(self, user_id: int, fields: dict[str, Any]) -> dict[str, str]:
        with self._lock:
            doc = self._user_doc(user_id)
            stored = doc.setdefault("settings", dict(DEFAULT_SETTINGS))
            stored.update({key: setting_value(value) for key, value in fields.items()})
            self._save()
            return {**DEFAULT_SETTINGS, **stored}

    def import_user_data(self, user_id: int, data: dict[str, Any]) -> None:
        with self._lock:
            doc = self._user_doc(user_id)
            stamp = clock.timestamp()
            counters = doc.setdefault("next_ids", {})
            for collection in COLLECTIONS:
                records = data.get(collection)
                if records is None:
                    continue
                shaped, next_id = prepare_import(collection, records, counters.get(collection, 1), stamp)
                doc[collection] = shaped
                counters[collection] = next_id
            if data.get("settings"):
                stored = doc.setdefault("settings", dict(DEFAULT_SETTINGS))
                stored.update({k: setting_value(v) for k, v in data["settings"].items()})
            self._save()
            logger.info("Imported data for user %s", user_id)

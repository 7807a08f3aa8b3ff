"""Storage contract shared by the JSON and SQL backends.

Every record belongs to one owner (a user id). Record ids are handed out per
(owner, collection) and never reused, so two users can hold records with the
same numeric id. Updates merge: only the provided keys change and
``updated_at`` is stamped. Removing an unknown id is a no-op. References
between records (task -> category, session -> task) are never checked.
"""
import abc
from dataclasses import dataclass
from typing import Any, Optional

CATEGORIES = "categories"
TASKS = "tasks"
TIME_BLOCKS = "time_blocks"
POMODORO_SESSIONS = "pomodoro_sessions"

# Field order here is the key order of every stored record.
COLLECTION_FIELDS: dict[str, tuple[str, ...]] = {
    CATEGORIES: ("name", "color", "icon"),
    TASKS: (
        "title",
        "description",
        "category_id",
        "priority",
        "due_date",
        "due_time",
        "status",
        "reminder_minutes_before",
        "voice_reminder",
    ),
    TIME_BLOCKS: ("title", "start_datetime", "end_datetime", "category_id", "color"),
    POMODORO_SESSIONS: (
        "task_id",
        "duration_minutes",
        "session_type",
        "completed",
        "started_at",
        "completed_at",
        "session_date",
    ),
}

COLLECTIONS = tuple(COLLECTION_FIELDS)

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "École", "color": "#4DA8DA", "icon": "fas fa-graduation-cap"},
    {"name": "Projets Dev", "color": "#1E3A5F", "icon": "fas fa-code"},
    {"name": "Personnel", "color": "#E74C3C", "icon": "fas fa-user"},
    {"name": "Révisions", "color": "#F39C12", "icon": "fas fa-book"},
    {"name": "Sport", "color": "#8E44AD", "icon": "fas fa-dumbbell"},
]

DEFAULT_SETTINGS: dict[str, str] = {
    "morning_briefing_time": "07:30",
    "morning_briefing_enabled": "true",
    "tts_voice": "default",
    "tts_lang": "fr-FR",
    "alarm_volume": "0.8",
    "pomodoro_work_minutes": "25",
    "pomodoro_break_minutes": "5",
    "pomodoro_long_break_minutes": "15",
    "hyperfocus_check_enabled": "true",
    "hyperfocus_check_interval_minutes": "120",
    "theme": "light",
    "language": "fr",
    "notification_sound": "chime",
    "auto_start_break": "false",
    "daily_goal": "5",
}


@dataclass(frozen=True)
class UserAccount:
    id: int
    name: str
    email: str
    password_hash: str
    created_at: str

    def public(self) -> dict[str, Any]:
        """Client-facing view; never includes the password hash."""
        return {"id": self.id, "name": self.name, "email": self.email}


def fields_for(collection: str) -> tuple[str, ...]:
    try:
        return COLLECTION_FIELDS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection!r}") from None


def shape_record(
    collection: str,
    record_id: int,
    values: dict[str, Any],
    created_at: Optional[str],
    updated_at: Optional[str] = None,
) -> dict[str, Any]:
    """Build a record with the canonical key set and order for ``collection``."""
    record: dict[str, Any] = {"id": record_id}
    for name in fields_for(collection):
        record[name] = values.get(name)
    record["created_at"] = created_at
    record["updated_at"] = updated_at
    return record


def writable_fields(collection: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Drop unknown keys and system-managed ones (id, timestamps)."""
    allowed = fields_for(collection)
    return {k: v for k, v in payload.items() if k in allowed}


def setting_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def prepare_import(
    collection: str, records: list[dict[str, Any]], next_id: int, stamp: str
) -> tuple[list[dict[str, Any]], int]:
    """Shape imported records and return them with the collection's new next id.

    Imported ids and timestamps are kept. Records without a usable id, or
    repeating an id already seen, get a fresh one past every imported id.
    """
    seen: set[int] = set()
    kept: list[tuple[Optional[int], dict[str, Any]]] = []
    for raw in records:
        rid = raw.get("id")
        if not isinstance(rid, int) or isinstance(rid, bool) or rid < 1 or rid in seen:
            rid = None
        else:
            seen.add(rid)
        kept.append((rid, raw))

    counter = max([next_id] + [rid + 1 for rid in seen])
    shaped = []
    for rid, raw in kept:
        if rid is None:
            rid = counter
            counter += 1
        shaped.append(
            shape_record(
                collection,
                rid,
                writable_fields(collection, raw),
                raw.get("created_at") or stamp,
                raw.get("updated_at"),
            )
        )
    return shaped, counter


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityStore(abc.ABC):
    """User accounts. Users are created once and never updated or deleted."""

    @abc.abstractmethod
    def create_user(self, name: str, email: str, password_hash: str) -> UserAccount:
        """Create a user and seed its default categories and settings.

        Raises Conflict if the (lowercased) email is already taken.
        """

    @abc.abstractmethod
    def find_user_by_email(self, email: str) -> Optional[UserAccount]:
        ...

    @abc.abstractmethod
    def get_user_by_id(self, user_id: int) -> Optional[UserAccount]:
        ...


class RecordStore(abc.ABC):
    """Per-owner collections plus a flat settings mapping."""

    @abc.abstractmethod
    def list_all(self, user_id: int, collection: str) -> list[dict[str, Any]]:
        ...

    @abc.abstractmethod
    def get_by_id(self, user_id: int, collection: str, record_id: int) -> Optional[dict[str, Any]]:
        ...

    @abc.abstractmethod
    def insert(self, user_id: int, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        ...

    @abc.abstractmethod
    def update(
        self, user_id: int, collection: str, record_id: int, fields: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        ...

    @abc.abstractmethod
    def remove(self, user_id: int, collection: str, record_id: int) -> None:
        ...

    @abc.abstractmethod
    def get_settings(self, user_id: int) -> dict[str, str]:
        ...

    @abc.abstractmethod
    def update_settings(self, user_id: int, fields: dict[str, Any]) -> dict[str, str]:
        ...

    @abc.abstractmethod
    def import_user_data(self, user_id: int, data: dict[str, Any]) -> None:
        """Replace each collection present in ``data``; merge ``settings``."""

    def export_user_data(self, user_id: int) -> dict[str, Any]:
        dump: dict[str, Any] = {name: self.list_all(user_id, name) for name in COLLECTIONS}
        dump["settings"] = self.get_settings(user_id)
        return dump


class Store(IdentityStore, RecordStore):
    """A complete storage backend."""

    backend_name = "abstract"

    def close(self) -> None:
        """Release backend resources."""

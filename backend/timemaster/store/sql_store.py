"""Relational backend on SQLAlchemy.

Each collection is a table keyed by (user_id, id); settings live in
``user_settings`` and per-collection id counters in ``record_counters``.
One session per call, and every multi-statement write commits as a single
transaction.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from timemaster import clock
from timemaster.database import Base, make_session_factory
from timemaster.errors import Conflict, NotFound
from timemaster.models import Category, PomodoroSession, RecordCounter, Task, TimeBlock, User, UserSetting
from timemaster.store.base import (
    CATEGORIES,
    COLLECTIONS,
    DEFAULT_CATEGORIES,
    DEFAULT_SETTINGS,
    POMODORO_SESSIONS,
    TASKS,
    TIME_BLOCKS,
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

MODELS = {
    CATEGORIES: Category,
    TASKS: Task,
    TIME_BLOCKS: TimeBlock,
    POMODORO_SESSIONS: PomodoroSession,
}


def _model_for(collection: str):
    fields_for(collection)
    return MODELS[collection]


def _to_record(collection: str, row) -> dict[str, Any]:
    values = {name: getattr(row, name) for name in fields_for(collection)}
    return shape_record(collection, row.id, values, row.created_at, row.updated_at)


def _to_account(user: User) -> UserAccount:
    return UserAccount(
        id=user.id,
        name=user.name,
        email=user.email,
        password_hash=user.password_hash,
        created_at=user.created_at,
    )


class SqlStore(Store):
    backend_name = "sql"

    def __init__(self, engine: Engine, create_schema: bool = False):
        self._engine = engine
        self._session_factory = make_session_factory(engine)
        if create_schema:
            Base.metadata.create_all(bind=engine)
        logger.info("SqlStore ready url=%s", engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session wrapped in a transaction: commit on success, roll back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _require_user(session: Session, user_id: int) -> User:
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def _counter(session: Session, user_id: int, collection: str) -> RecordCounter:
        counter = session.execute(
            select(RecordCounter)
            .where(RecordCounter.user_id == user_id, RecordCounter.collection == collection)
            .with_for_update()
        ).scalar_one_or_none()
        if counter is None:
            counter = RecordCounter(user_id=user_id, collection=collection, next_id=1)
            session.add(counter)
        return counter

    def _allocate_id(self, session: Session, user_id: int, collection: str) -> int:
        counter = self._counter(session, user_id, collection)
        record_id = counter.next_id
        counter.next_id = record_id + 1
        return record_id

    # ---- identity ----

    def create_user(self, name: str, email: str, password_hash: str) -> UserAccount:
        stamp = clock.timestamp()
        with self._session() as session:
            user = User(name=name, email=normalize_email(email), password_hash=password_hash, created_at=stamp)
            session.add(user)
            try:
                session.flush()
            except IntegrityError:
                raise Conflict("This email is already registered") from None

            for i, cat in enumerate(DEFAULT_CATEGORIES, start=1):
                session.add(Category(user_id=user.id, id=i, created_at=stamp, **cat))
            session.add(RecordCounter(user_id=user.id, collection=CATEGORIES, next_id=len(DEFAULT_CATEGORIES) + 1))
            for collection in (TASKS, TIME_BLOCKS, POMODORO_SESSIONS):
                session.add(RecordCounter(user_id=user.id, collection=collection, next_id=1))
            for key, value in DEFAULT_SETTINGS.items():
                session.add(UserSetting(user_id=user.id, key=key, value=value))
            session.flush()
            account = _to_account(user)
        logger.info("Created user %s (%s)", account.id, account.email)
        return account

    def find_user_by_email(self, email: str) -> Optional[UserAccount]:
        with self._session() as session:
            user = session.execute(
                select(User).where(User.email == normalize_email(email))
            ).scalar_one_or_none()
            return _to_account(user) if user else None

    def get_user_by_id(self, user_id: int) -> Optional[UserAccount]:
        with self._session() as session:
            user = session.get(User, user_id)
            return _to_account(user) if user else None

    # ---- records ----

    def list_all(self, user_id: int, collection: str) -> list[dict[str, Any]]:
        model = _model_for(collection)
        with self._session() as session:
            self._require_user(session, user_id)
            rows = session.execute(
                select(model).where(model.user_id == user_id).order_by(model.id)
            ).scalars().all()
            return [_to_record(collection, row) for row in rows]

    def get_by_id(self, user_id: int, collection: str, record_id: int) -> Optional[dict[str, Any]]:
        model = _model_for(collection)
        with self._session() as session:
            self._require_user(session, user_id)
            row = session.get(model, (user_id, record_id))
            return _to_record(collection, row) if row else None

    def insert(self, user_id: int, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        model = _model_for(collection)
        with self._session() as session:
            self._require_user(session, user_id)
            row = model(
                user_id=user_id,
                id=self._allocate_id(session, user_id, collection),
                created_at=clock.timestamp(),
                **writable_fields(collection, fields),
            )
            session.add(row)
            session.flush()
            record = _to_record(collection, row)
        logger.info("Inserted %s #%s for user %s", collection, record["id"], user_id)
        return record

    def update(
        self, user_id: int, collection: str, record_id: int, fields: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        model = _model_for(collection)
        with self._session() as session:
            self._require_user(session, user_id)
            row = session.get(model, (user_id, record_id))
            if row is None:
                return None
            for name, value in writable_fields(collection, fields).items():
                setattr(row, name, value)
            row.updated_at = clock.timestamp()
            session.flush()
            record = _to_record(collection, row)
        logger.debug("Updated %s #%s for user %s", collection, record_id, user_id)
        return record

    def remove(self, user_id: int, collection: str, record_id: int) -> None:
        model = _model_for(collection)
        with self._session() as session:
            self._require_user(session, user_id)
            result = session.execute(
                delete(model).where(model.user_id == user_id, model.id == record_id)
            )
        if result.rowcount:
            logger.info("Deleted %s #%s for user %s", collection, record_id, user_id)

    # ---- settings ----

    @staticmethod
    def _read_settings(session: Session, user_id: int) -> dict[str, str]:
        rows = session.execute(select(UserSetting).where(UserSetting.user_id == user_id)).scalars().all()
        return {**DEFAULT_SETTINGS, **{row.key: row.value for row in rows}}

    @staticmethod
    def _merge_settings(session: Session, user_id: int, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            row = session.get(UserSetting, (user_id, key))
            if row is None:
                session.add(UserSetting(user_id=user_id, key=key, value=setting_value(value)))
            else:
                row.value = setting_value(value)
        session.flush()

    def get_settings(self, user_id: int) -> dict[str, str]:
        with self._session() as session:
            self._require_user(session, user_id)
            return self._read_settings(session, user_id)

    def update_settings(self, user_id: int, fields: dict[str, Any]) -> dict[str, str]:
        with self._session() as session:
            self._require_user(session, user_id)
            self._merge_settings(session, user_id, fields)
            return self._read_settings(session, user_id)

    def import_user_data(self, user_id: int, data: dict[str, Any]) -> None:
        stamp = clock.timestamp()
        with self._session() as session:
            self._require_user(session, user_id)
            for collection in COLLECTIONS:
                records = data.get(collection)
                if records is None:
                    continue
                model = MODELS[collection]
                counter = self._counter(session, user_id, collection)
                shaped, next_id = prepare_import(collection, records, counter.next_id, stamp)
                session.execute(delete(model).where(model.user_id == user_id))
                for record in shaped:
                    session.add(model(user_id=user_id, **record))
                counter.next_id = next_id
            if data.get("settings"):
                self._merge_settings(session, user_id, data["settings"])
        logger.info("Imported data for user %s", user_id)

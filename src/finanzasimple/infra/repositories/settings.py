"""SQLModel-backed key-value store."""

from __future__ import annotations

from typing import Callable, ContextManager, Mapping, Optional

from sqlalchemy import delete
from sqlmodel import Session, select

from ...models.settings import ClientSetting


class SQLModelKeyValueStore:
    """Persists the session record in the local ``client_setting`` table."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            row = session.get(ClientSetting, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        """Upsert every pair in a single transaction."""

        with self.session_factory() as session:
            for key, value in items.items():
                row = session.get(ClientSetting, key)
                if row:
                    row.value = value
                else:
                    row = ClientSetting(key=key, value=value)
                session.add(row)

    def clear(self, *keys: str) -> None:
        with self.session_factory() as session:
            statement = delete(ClientSetting)
            if keys:
                statement = statement.where(ClientSetting.key.in_(keys))  # type: ignore[attr-defined]
            session.execute(statement)

    def keys(self) -> list[str]:
        with self.session_factory() as session:
            return list(session.exec(select(ClientSetting.key).order_by(ClientSetting.key)).all())


__all__ = ["SQLModelKeyValueStore"]

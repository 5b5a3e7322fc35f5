"""Client state persisted between runs."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel


class ClientSetting(SQLModel, table=True):
    """Key-value row backing the durable session record."""

    __tablename__: ClassVar[str] = "client_setting"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(nullable=False)

"""Authenticated user as returned by the auth endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """The ``{_id, email}`` pair kept alongside the bearer token."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(alias="_id")
    email: str

    def to_storage(self) -> str:
        """Serialise to the JSON stored under the ``user`` key."""
        return self.model_dump_json(by_alias=True)

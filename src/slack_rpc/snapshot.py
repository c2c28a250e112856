"""Workspace snapshot produced by the handshake.

Replaces process-wide lookup tables: connect() returns a snapshot, callers
pass it along explicitly. A snapshot never changes; with_entities() returns a
new one with a bumped version. Building it happens once, on one thread; after
that it is only read, which is why no locking is involved.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .api.responses import LoginResponse

Entity = Dict[str, Any]


def index_by_id(entities: Optional[Iterable[Entity]]) -> Dict[str, Entity]:
    return {e["id"]: e for e in entities or () if "id" in e}


class WorkspaceSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: int = 1
    self_user: Optional[Entity] = None
    team: Optional[Entity] = None
    users: Dict[str, Entity] = Field(default_factory=dict)
    bots: Dict[str, Entity] = Field(default_factory=dict)
    channels: Dict[str, Entity] = Field(default_factory=dict)
    groups: Dict[str, Entity] = Field(default_factory=dict)
    direct_messages: Dict[str, Entity] = Field(default_factory=dict)
    conversations: Dict[str, Entity] = Field(default_factory=dict)

    @classmethod
    def from_login(cls, login: LoginResponse) -> "WorkspaceSnapshot":
        extra = login.model_extra or {}
        return cls(
            self_user=login.self_,
            team=login.team,
            users=index_by_id(extra.get("users")),
            bots=index_by_id(extra.get("bots")),
            channels=index_by_id(extra.get("channels")),
            groups=index_by_id(extra.get("groups")),
            direct_messages=index_by_id(extra.get("ims")),
        )

    def with_entities(self, **maps: Iterable[Entity]) -> "WorkspaceSnapshot":
        """New snapshot with the given tables merged in, version + 1.

        Keyword names are the table names (users, channels, ...); values are
        lists of entity dicts carrying an ``id``.
        """
        update: Dict[str, Any] = {"version": self.version + 1}
        for name, entities in maps.items():
            if name not in type(self).model_fields or name in ("version", "self_user", "team"):
                raise ValueError(f"Unknown lookup table: {name}")
            merged = dict(getattr(self, name))
            merged.update(index_by_id(entities))
            update[name] = merged
        return self.model_copy(update=update)

    def user(self, user_id: str) -> Optional[Entity]:
        return self.users.get(user_id)

    def channel(self, channel_id: str) -> Optional[Entity]:
        return (
            self.channels.get(channel_id)
            or self.conversations.get(channel_id)
            or self.groups.get(channel_id)
            or self.direct_messages.get(channel_id)
        )

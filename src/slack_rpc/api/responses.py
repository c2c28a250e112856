"""Response envelopes and the decoder.

Every Web API reply is a JSON object with a mandatory ``ok`` flag. On failure
``error`` carries the code and nothing else is meaningful; on success the
operation's own fields are filled in. Domain objects (users, channels, files,
messages) are kept as plain dicts.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, model_validator

from ..errors import DecodeError

Entity = Dict[str, Any]


class Response(BaseModel):
    model_config = ConfigDict(extra="allow")

    ok: StrictBool
    error: Optional[str] = None
    warning: Optional[str] = None
    needed: Optional[str] = None
    provided: Optional[str] = None
    response_metadata: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def require_error_when_not_ok(self):
        if not self.ok and not self.error:
            raise ValueError("envelope has ok=false but no error code")
        return self

    @property
    def next_cursor(self) -> Optional[str]:
        if self.response_metadata:
            return self.response_metadata.get("next_cursor") or None
        return None


# auth / users

class AuthTestResponse(Response):
    url: Optional[str] = None
    team: Optional[str] = None
    user: Optional[str] = None
    team_id: Optional[str] = None
    user_id: Optional[str] = None
    bot_id: Optional[str] = None


class LoginResponse(Response):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: Optional[str] = None
    self_: Optional[Entity] = Field(None, alias="self")
    team: Optional[Entity] = None


class UserListResponse(Response):
    members: Optional[List[Entity]] = None


class UserInfoResponse(Response):
    user: Optional[Entity] = None


class UserEmailLookupResponse(UserInfoResponse):
    pass


class UserGetPresenceResponse(Response):
    presence: Optional[str] = None
    online: Optional[bool] = None
    auto_away: Optional[bool] = None
    manual_away: Optional[bool] = None
    connection_count: Optional[int] = None
    last_activity: Optional[int] = None


class UserCountsResponse(Response):
    channels: Optional[List[Entity]] = None
    groups: Optional[List[Entity]] = None
    ims: Optional[List[Entity]] = None


class UserPreferencesResponse(Response):
    prefs: Optional[Entity] = None


class PresenceResponse(Response):
    pass


# channels / groups / conversations

class ChannelResponse(Response):
    channel: Optional[Entity] = None


class GroupResponse(Response):
    group: Optional[Entity] = None


class ChannelListResponse(Response):
    channels: Optional[List[Entity]] = None


class GroupListResponse(Response):
    groups: Optional[List[Entity]] = None


class DirectMessageListResponse(Response):
    ims: Optional[List[Entity]] = None


class ConversationsListResponse(Response):
    channels: Optional[List[Entity]] = None


class ConversationsMembersResponse(Response):
    members: Optional[List[str]] = None


class MessageHistoryResponse(Response):
    messages: Optional[List[Entity]] = None
    has_more: Optional[bool] = None
    latest: Optional[str] = None
    unread_count_display: Optional[int] = None


class MarkResponse(Response):
    pass


class ConversationsOpenResponse(ChannelResponse):
    no_op: Optional[bool] = None
    already_open: Optional[bool] = None


class ConversationsCloseResponse(Response):
    no_op: Optional[bool] = None
    already_closed: Optional[bool] = None


class PurposeResponse(Response):
    purpose: Optional[str] = None
    channel: Optional[Entity] = None


class TopicResponse(Response):
    topic: Optional[str] = None
    channel: Optional[Entity] = None


class SimpleResponse(Response):
    """Operations whose success reply is just ``{"ok": true}``."""


class JoinDirectMessageChannelResponse(ChannelResponse):
    pass


# search / stars

class SearchResponse(Response):
    query: Optional[str] = None
    messages: Optional[Entity] = None
    files: Optional[Entity] = None
    posts: Optional[Entity] = None


class StarListResponse(Response):
    items: Optional[List[Entity]] = None
    paging: Optional[Entity] = None


# chat

class PostMessageResponse(Response):
    ts: Optional[str] = None
    channel: Optional[str] = None
    message: Optional[Entity] = None


class UpdateResponse(Response):
    ts: Optional[str] = None
    channel: Optional[str] = None
    text: Optional[str] = None


class DeletedResponse(Response):
    ts: Optional[str] = None
    channel: Optional[str] = None


class PostEphemeralResponse(Response):
    message_ts: Optional[str] = None


class ScheduleMessageResponse(Response):
    channel: Optional[str] = None
    scheduled_message_id: Optional[str] = None
    post_at: Optional[int] = None
    message: Optional[Entity] = None


class DialogOpenResponse(Response):
    pass


class ReactionAddedResponse(Response):
    pass


class AppHomeTabResponse(Response):
    view: Optional[Entity] = None


# files

class FileListResponse(Response):
    files: Optional[List[Entity]] = None
    paging: Optional[Entity] = None


class FileInfoResponse(Response):
    file: Optional[Entity] = None
    comments: Optional[List[Entity]] = None
    paging: Optional[Entity] = None


class FileDeleteResponse(Response):
    pass


class GetUploadUrlExternalResponse(Response):
    upload_url: Optional[str] = None
    file_id: Optional[str] = None


class UploadedFile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = None


class CompleteUploadExternalResponse(Response):
    files: Optional[List[UploadedFile]] = None


class FileUploadResponse(Response):
    file: Optional[Entity] = None


R = TypeVar("R", bound=Response)


def decode(raw: str, model: Type[R]) -> R:
    """Decode a raw body into ``model``.

    Raises DecodeError when the body is not JSON, is not an object, has no
    ``ok`` field or does not fit the model. A missing ``ok`` is never read as
    success.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}", raw=raw) from e

    if not isinstance(data, dict):
        raise DecodeError("Response is not a JSON object", raw=raw)
    if "ok" not in data:
        raise DecodeError("Response has no 'ok' field", raw=raw)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Response does not match {model.__name__}: {e}", raw=raw) from e

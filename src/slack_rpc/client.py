"""Slack Web API client.

Every operation assembles its parameters, calls the API through the transport,
decodes the reply into its envelope type and returns it. An optional
``callback`` receives the same envelope exactly once, on the calling thread,
before the method returns. Transport and decode failures raise instead.

Protocol failures (``ok: false``) are ordinary envelopes: check ``response.ok``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

from .api.dispatch import Callback, dispatch
from .api.params import BoolStyle, FileType, ParamList, file_types_param
from .api.payload import encode_payload
from .api.responses import (
    AppHomeTabResponse,
    AuthTestResponse,
    ChannelListResponse,
    ChannelResponse,
    CompleteUploadExternalResponse,
    ConversationsCloseResponse,
    ConversationsListResponse,
    ConversationsMembersResponse,
    ConversationsOpenResponse,
    DeletedResponse,
    DialogOpenResponse,
    DirectMessageListResponse,
    FileDeleteResponse,
    FileInfoResponse,
    FileListResponse,
    GetUploadUrlExternalResponse,
    GroupListResponse,
    GroupResponse,
    JoinDirectMessageChannelResponse,
    LoginResponse,
    MarkResponse,
    MessageHistoryResponse,
    PostEphemeralResponse,
    PostMessageResponse,
    PresenceResponse,
    PurposeResponse,
    ReactionAddedResponse,
    Response,
    ScheduleMessageResponse,
    SearchResponse,
    SimpleResponse,
    StarListResponse,
    TopicResponse,
    UpdateResponse,
    UserCountsResponse,
    UserEmailLookupResponse,
    UserGetPresenceResponse,
    UserInfoResponse,
    UserListResponse,
    UserPreferencesResponse,
    decode,
)
from .api.timestamps import to_epoch_seconds, to_slack_ts
from .api.transport import HttpTransport, MultipartPart
from .config import Settings, get_settings
from .log import get_logger
from .models import Attachment, Block, Dialog, View
from .snapshot import WorkspaceSnapshot
from .upload import FileUploader, UploadSession

logger = get_logger("slack_client")

R = TypeVar("R", bound=Response)


class SlackClient:
    def __init__(
        self,
        token: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.token = token if token is not None else self.settings.SLACK_BOT_TOKEN
        self.transport = transport or HttpTransport(
            base_url=self.settings.SLACK_API_BASE_URL,
            timeout=self.settings.SLACK_HTTP_TIMEOUT,
            user_agent=self.settings.SLACK_USER_AGENT,
        )

    # -- generic request path -------------------------------------------------

    def request(
        self,
        method: str,
        response_model: Type[R],
        params: Iterable[Tuple[str, str]] = (),
        callback: Optional[Callback] = None,
    ) -> R:
        """GET ``method`` and decode the body with ``response_model``."""
        params = list(params)
        logger.debug(f"Calling {method} with {[name for name, _ in params]}")
        raw = self.transport.get(method, self.token, params)
        response = decode(raw, response_model)
        self._log_failure(method, response)
        return dispatch(response, callback)

    def post_form(
        self,
        method: str,
        response_model: Type[R],
        parts: Sequence[MultipartPart],
        callback: Optional[Callback] = None,
    ) -> R:
        """Multipart POST to ``method`` and decode the body with ``response_model``."""
        logger.debug(f"Posting {method} with {[p.name for p in parts]}")
        raw = self.transport.post_multipart(method, self.token, parts)
        response = decode(raw, response_model)
        self._log_failure(method, response)
        return dispatch(response, callback)

    @staticmethod
    def _log_failure(method: str, response: Response) -> None:
        if not response.ok:
            logger.warning(f"Slack API error on {method}: {response.error}")

    # -- handshake --------------------------------------------------------------

    def connect(
        self,
        callback: Optional[Callback] = None,
        agent: Optional[str] = None,
    ) -> Tuple[LoginResponse, Optional[WorkspaceSnapshot]]:
        """Log in and build the workspace snapshot.

        The snapshot is None when the login envelope reports a failure. The
        callback receives the login envelope, as with any other operation.
        """
        login = self.emit_login(agent=agent)
        snapshot = WorkspaceSnapshot.from_login(login) if login.ok else None
        dispatch(login, callback)
        return login, snapshot

    def emit_login(self, agent: Optional[str] = None, callback: Optional[Callback] = None) -> LoginResponse:
        params = ParamList(("agent", agent or self.settings.SLACK_LOGIN_AGENT))
        return self.request("rtm.connect", LoginResponse, params, callback)

    def auth_test(self, callback: Optional[Callback] = None) -> AuthTestResponse:
        return self.request("auth.test", AuthTestResponse, (), callback)

    # -- users ------------------------------------------------------------------

    def users_list(self, callback: Optional[Callback] = None) -> UserListResponse:
        return self.request("users.list", UserListResponse, (), callback)

    def users_lookup_by_email(self, email: str, callback: Optional[Callback] = None) -> UserEmailLookupResponse:
        return self.request("users.lookupByEmail", UserEmailLookupResponse, ParamList(("email", email)), callback)

    def users_info(self, user: str, callback: Optional[Callback] = None) -> UserInfoResponse:
        return self.request("users.info", UserInfoResponse, ParamList(("user", user)), callback)

    def users_get_presence(self, user: str, callback: Optional[Callback] = None) -> UserGetPresenceResponse:
        return self.request("users.getPresence", UserGetPresenceResponse, ParamList(("user", user)), callback)

    def users_counts(self, callback: Optional[Callback] = None) -> UserCountsResponse:
        return self.request("users.counts", UserCountsResponse, (), callback)

    def users_prefs(self, callback: Optional[Callback] = None) -> UserPreferencesResponse:
        return self.request("users.prefs.get", UserPreferencesResponse, (), callback)

    def presence_set(self, presence: str, callback: Optional[Callback] = None) -> PresenceResponse:
        """Set presence to ``auto`` or ``away``."""
        return self.request("users.setPresence", PresenceResponse, ParamList(("presence", presence)), callback)

    # -- channels (legacy) ------------------------------------------------------

    def channels_create(self, name: str, callback: Optional[Callback] = None) -> ChannelResponse:
        return self.request("channels.create", ChannelResponse, ParamList(("name", name)), callback)

    def channels_invite(self, user_id: str, channel_id: str, callback: Optional[Callback] = None) -> ChannelResponse:
        params = ParamList(("channel", channel_id), ("user", user_id))
        return self.request("channels.invite", ChannelResponse, params, callback)

    def channels_list(self, exclude_archived: bool = True, callback: Optional[Callback] = None) -> ChannelListResponse:
        params = ParamList().add_flag("exclude_archived", exclude_archived, BoolStyle.DIGIT).add("limit", 1000)
        return self.request("channels.list", ChannelListResponse, params, callback)

    def groups_list(self, exclude_archived: bool = True, callback: Optional[Callback] = None) -> GroupListResponse:
        params = ParamList().add_flag("exclude_archived", exclude_archived, BoolStyle.DIGIT)
        return self.request("groups.list", GroupListResponse, params, callback)

    def im_list(self, callback: Optional[Callback] = None) -> DirectMessageListResponse:
        return self.request("im.list", DirectMessageListResponse, (), callback)

    # -- history ----------------------------------------------------------------

    @staticmethod
    def history_params(
        channel: str,
        latest: Optional[datetime] = None,
        oldest: Optional[datetime] = None,
        count: Optional[int] = None,
        unreads: Optional[bool] = False,
    ) -> ParamList:
        return (
            ParamList(("channel", channel))
            .add_timestamp("latest", latest)
            .add_timestamp("oldest", oldest)
            .add_int("count", count)
            .add_flag("unreads", unreads, BoolStyle.DIGIT)
        )

    def _history(self, method: str, channel: str, callback: Optional[Callback], **kwargs) -> MessageHistoryResponse:
        return self.request(method, MessageHistoryResponse, self.history_params(channel, **kwargs), callback)

    def conversations_history(
        self,
        channel: str,
        latest: Optional[datetime] = None,
        oldest: Optional[datetime] = None,
        count: Optional[int] = None,
        unreads: Optional[bool] = False,
        callback: Optional[Callback] = None,
    ) -> MessageHistoryResponse:
        return self._history(
            "conversations.history", channel, callback,
            latest=latest, oldest=oldest, count=count, unreads=unreads,
        )

    def channels_history(
        self,
        channel: str,
        latest: Optional[datetime] = None,
        oldest: Optional[datetime] = None,
        count: Optional[int] = None,
        unreads: Optional[bool] = False,
        callback: Optional[Callback] = None,
    ) -> MessageHistoryResponse:
        return self._history(
            "channels.history", channel, callback,
            latest=latest, oldest=oldest, count=count, unreads=unreads,
        )

    def groups_history(
        self,
        channel: str,
        latest: Optional[datetime] = None,
        oldest: Optional[datetime] = None,
        count: Optional[int] = None,
        unreads: Optional[bool] = False,
        callback: Optional[Callback] = None,
    ) -> MessageHistoryResponse:
        return self._history(
            "groups.history", channel, callback,
            latest=latest, oldest=oldest, count=count, unreads=unreads,
        )

    def im_history(
        self,
        channel: str,
        latest: Optional[datetime] = None,
        oldest: Optional[datetime] = None,
        count: Optional[int] = None,
        unreads: Optional[bool] = False,
        callback: Optional[Callback] = None,
    ) -> MessageHistoryResponse:
        return self._history(
            "im.history", channel, callback,
            latest=latest, oldest=oldest, count=count, unreads=unreads,
        )

    def _mark(self, method: str, channel_id: str, ts: datetime, callback: Optional[Callback]) -> MarkResponse:
        params = ParamList(("channel", channel_id), ("ts", to_slack_ts(ts)))
        return self.request(method, MarkResponse, params, callback)

    def channels_mark(self, channel_id: str, ts: datetime, callback: Optional[Callback] = None) -> MarkResponse:
        return self._mark("channels.mark", channel_id, ts, callback)

    def groups_mark(self, channel_id: str, ts: datetime, callback: Optional[Callback] = None) -> MarkResponse:
        return self._mark("groups.mark", channel_id, ts, callback)

    def conversations_mark(self, channel_id: str, ts: datetime, callback: Optional[Callback] = None) -> MarkResponse:
        return self._mark("conversations.mark", channel_id, ts, callback)

    # -- groups (legacy private channels) ----------------------------------------

    def _channel_op(self, method: str, model: Type[R], channel_id: str, callback: Optional[Callback]) -> R:
        return self.request(method, model, ParamList(("channel", channel_id)), callback)

    def groups_archive(self, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        return self._channel_op("groups.archive", SimpleResponse, channel_id, callback)

    def groups_close(self, channel_id: str, callback: Optional[Callback] = None) -> ConversationsCloseResponse:
        return self._channel_op("groups.close", ConversationsCloseResponse, channel_id, callback)

    def groups_create(self, name: str, callback: Optional[Callback] = None) -> GroupResponse:
        return self.request("groups.create", GroupResponse, ParamList(("name", name)), callback)

    def groups_create_child(self, channel_id: str, callback: Optional[Callback] = None) -> GroupResponse:
        return self._channel_op("groups.createChild", GroupResponse, channel_id, callback)

    def groups_invite(self, user_id: str, channel_id: str, callback: Optional[Callback] = None) -> GroupResponse:
        params = ParamList(("channel", channel_id), ("user", user_id))
        return self.request("groups.invite", GroupResponse, params, callback)

    def groups_kick(self, user_id: str, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        params = ParamList(("channel", channel_id), ("user", user_id))
        return self.request("groups.kick", SimpleResponse, params, callback)

    def groups_leave(self, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        return self._channel_op("groups.leave", SimpleResponse, channel_id, callback)

    def groups_open(self, channel_id: str, callback: Optional[Callback] = None) -> ConversationsOpenResponse:
        return self._channel_op("groups.open", ConversationsOpenResponse, channel_id, callback)

    def groups_rename(self, channel_id: str, name: str, callback: Optional[Callback] = None) -> GroupResponse:
        params = ParamList(("channel", channel_id), ("name", name))
        return self.request("groups.rename", GroupResponse, params, callback)

    def groups_set_purpose(self, channel_id: str, purpose: str, callback: Optional[Callback] = None) -> PurposeResponse:
        params = ParamList(("channel", channel_id), ("purpose", purpose))
        return self.request("groups.setPurpose", PurposeResponse, params, callback)

    def groups_set_topic(self, channel_id: str, topic: str, callback: Optional[Callback] = None) -> TopicResponse:
        params = ParamList(("channel", channel_id), ("topic", topic))
        return self.request("groups.setTopic", TopicResponse, params, callback)

    def groups_unarchive(self, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        return self._channel_op("groups.unarchive", SimpleResponse, channel_id, callback)

    # -- conversations ----------------------------------------------------------

    def conversations_list(
        self,
        cursor: str = "",
        exclude_archived: bool = True,
        limit: int = 100,
        types: Optional[Sequence[str]] = None,
        callback: Optional[Callback] = None,
    ) -> ConversationsListResponse:
        params = (
            ParamList()
            .add_flag("exclude_archived", exclude_archived, BoolStyle.DIGIT)
            .add_positive("limit", limit)
            .add_joined("types", types)
            .add_str("cursor", cursor)
        )
        return self.request("conversations.list", ConversationsListResponse, params, callback)

    def conversations_members(
        self,
        channel_id: str,
        cursor: str = "",
        limit: int = 100,
        callback: Optional[Callback] = None,
    ) -> ConversationsMembersResponse:
        params = ParamList(("channel", channel_id)).add_positive("limit", limit).add_str("cursor", cursor)
        return self.request("conversations.members", ConversationsMembersResponse, params, callback)

    def conversations_archive(self, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        return self._channel_op("conversations.archive", SimpleResponse, channel_id, callback)

    def conversations_close(self, channel_id: str, callback: Optional[Callback] = None) -> ConversationsCloseResponse:
        return self._channel_op("conversations.close", ConversationsCloseResponse, channel_id, callback)

    def conversations_create(self, name: str, callback: Optional[Callback] = None) -> ChannelResponse:
        return self.request("conversations.create", ChannelResponse, ParamList(("name", name)), callback)

    def conversations_invite(
        self, channel_id: str, user_ids: Sequence[str], callback: Optional[Callback] = None
    ) -> ChannelResponse:
        params = ParamList(("channel", channel_id), ("users", ",".join(user_ids)))
        return self.request("conversations.invite", ChannelResponse, params, callback)

    def conversations_join(self, channel_id: str, callback: Optional[Callback] = None) -> ChannelResponse:
        return self._channel_op("conversations.join", ChannelResponse, channel_id, callback)

    def conversations_kick(self, channel_id: str, user_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        params = ParamList(("channel", channel_id), ("user", user_id))
        return self.request("conversations.kick", SimpleResponse, params, callback)

    def conversations_leave(self, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        return self._channel_op("conversations.leave", SimpleResponse, channel_id, callback)

    def conversations_open(self, channel_id: str, callback: Optional[Callback] = None) -> ConversationsOpenResponse:
        return self._channel_op("conversations.open", ConversationsOpenResponse, channel_id, callback)

    def conversations_rename(self, channel_id: str, name: str, callback: Optional[Callback] = None) -> ChannelResponse:
        params = ParamList(("channel", channel_id), ("name", name))
        return self.request("conversations.rename", ChannelResponse, params, callback)

    def conversations_set_purpose(
        self, channel_id: str, purpose: str, callback: Optional[Callback] = None
    ) -> PurposeResponse:
        params = ParamList(("channel", channel_id), ("purpose", purpose))
        return self.request("conversations.setPurpose", PurposeResponse, params, callback)

    def conversations_set_topic(self, channel_id: str, topic: str, callback: Optional[Callback] = None) -> TopicResponse:
        params = ParamList(("channel", channel_id), ("topic", topic))
        return self.request("conversations.setTopic", TopicResponse, params, callback)

    def conversations_unarchive(self, channel_id: str, callback: Optional[Callback] = None) -> SimpleResponse:
        return self._channel_op("conversations.unarchive", SimpleResponse, channel_id, callback)

    def join_direct_message_channel(
        self, user: str, callback: Optional[Callback] = None
    ) -> JoinDirectMessageChannelResponse:
        return self.request(
            "conversations.open", JoinDirectMessageChannelResponse, ParamList(("users", user)), callback
        )

    # -- search / stars ---------------------------------------------------------

    @staticmethod
    def search_params(
        query: str,
        sorting: Optional[str] = None,
        direction: Optional[str] = None,
        enable_highlights: bool = False,
        count: Optional[int] = None,
        page: Optional[int] = None,
    ) -> ParamList:
        params = ParamList(("query", query))
        if sorting is not None:
            params.add("sort", sorting)
        if direction is not None:
            params.add("sort_dir", direction)
        return (
            params.add_if_true("highlight", enable_highlights)
            .add_int("count", count)
            .add_int("page", page)
        )

    def _search(
        self,
        method: str,
        query: str,
        sorting: Optional[str],
        direction: Optional[str],
        enable_highlights: bool,
        count: Optional[int],
        page: Optional[int],
        callback: Optional[Callback],
    ) -> SearchResponse:
        params = self.search_params(query, sorting, direction, enable_highlights, count, page)
        return self.request(method, SearchResponse, params, callback)

    def search_all(
        self,
        query: str,
        sorting: Optional[str] = None,
        direction: Optional[str] = None,
        enable_highlights: bool = False,
        count: Optional[int] = None,
        page: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> SearchResponse:
        """Search messages and files."""
        return self._search("search.all", query, sorting, direction, enable_highlights, count, page, callback)

    def search_messages(
        self,
        query: str,
        sorting: Optional[str] = None,
        direction: Optional[str] = None,
        enable_highlights: bool = False,
        count: Optional[int] = None,
        page: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> SearchResponse:
        return self._search("search.messages", query, sorting, direction, enable_highlights, count, page, callback)

    def search_files(
        self,
        query: str,
        sorting: Optional[str] = None,
        direction: Optional[str] = None,
        enable_highlights: bool = False,
        count: Optional[int] = None,
        page: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> SearchResponse:
        return self._search("search.files", query, sorting, direction, enable_highlights, count, page, callback)

    def stars_list(
        self,
        user_id: Optional[str] = None,
        count: Optional[int] = None,
        page: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> StarListResponse:
        params = ParamList().add_str("user", user_id).add_int("count", count).add_int("page", page)
        return self.request("stars.list", StarListResponse, params, callback)

    # -- chat -------------------------------------------------------------------

    def chat_delete(self, channel_id: str, ts: datetime, callback: Optional[Callback] = None) -> DeletedResponse:
        params = ParamList(("ts", to_slack_ts(ts)), ("channel", channel_id))
        return self.request("chat.delete", DeletedResponse, params, callback)

    def chat_update(
        self,
        ts: str,
        channel_id: str,
        text: str,
        bot_name: Optional[str] = None,
        parse: Optional[str] = None,
        link_names: bool = False,
        blocks: Optional[Sequence[Block]] = None,
        attachments: Optional[Sequence[Attachment]] = None,
        as_user: Optional[bool] = None,
        callback: Optional[Callback] = None,
    ) -> UpdateResponse:
        params = (
            ParamList(("ts", ts), ("channel", channel_id), ("text", text))
            .add_str("username", bot_name)
            .add_str("parse", parse)
            .add_if_true("link_names", link_names)
            .add_payload("blocks", blocks)
            .add_payload("attachments", attachments)
            .add_flag("as_user", as_user, BoolStyle.TITLE)
        )
        return self.request("chat.update", UpdateResponse, params, callback)

    @staticmethod
    def message_params(
        channel_id: str,
        text: str,
        bot_name: Optional[str] = None,
        parse: Optional[str] = None,
        link_names: bool = False,
        blocks: Optional[Sequence[Block]] = None,
        attachments: Optional[Sequence[Attachment]] = None,
        unfurl_links: Optional[bool] = None,
        icon_url: Optional[str] = None,
        icon_emoji: Optional[str] = None,
        as_user: Optional[bool] = None,
        thread_ts: Optional[str] = None,
        post_at: Optional[datetime] = None,
    ) -> ParamList:
        """Parameters shared by chat.postMessage and chat.scheduleMessage."""
        params = ParamList(("channel", channel_id), ("text", text))
        if post_at is not None:
            params.add("post_at", to_epoch_seconds(post_at))
        return (
            params.add_str("username", bot_name)
            .add_str("parse", parse)
            .add_if_true("link_names", link_names)
            .add_payload("blocks", blocks)
            .add_payload("attachments", attachments)
            .add_flag("unfurl_links", unfurl_links, BoolStyle.WORD)
            .add_str("icon_url", icon_url)
            .add_str("icon_emoji", icon_emoji)
            .add_flag("as_user", as_user, BoolStyle.TITLE)
            .add_str("thread_ts", thread_ts)
        )

    def chat_post_message(
        self,
        channel_id: str,
        text: str,
        bot_name: Optional[str] = None,
        parse: Optional[str] = None,
        link_names: bool = False,
        blocks: Optional[Sequence[Block]] = None,
        attachments: Optional[Sequence[Attachment]] = None,
        unfurl_links: Optional[bool] = None,
        icon_url: Optional[str] = None,
        icon_emoji: Optional[str] = None,
        as_user: Optional[bool] = None,
        thread_ts: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> PostMessageResponse:
        params = self.message_params(
            channel_id, text,
            bot_name=bot_name, parse=parse, link_names=link_names, blocks=blocks,
            attachments=attachments, unfurl_links=unfurl_links, icon_url=icon_url,
            icon_emoji=icon_emoji, as_user=as_user, thread_ts=thread_ts,
        )
        return self.request("chat.postMessage", PostMessageResponse, params, callback)

    def chat_schedule_message(
        self,
        channel_id: str,
        text: str,
        post_at: datetime,
        bot_name: Optional[str] = None,
        parse: Optional[str] = None,
        link_names: bool = False,
        blocks: Optional[Sequence[Block]] = None,
        attachments: Optional[Sequence[Attachment]] = None,
        unfurl_links: Optional[bool] = None,
        icon_url: Optional[str] = None,
        icon_emoji: Optional[str] = None,
        as_user: Optional[bool] = None,
        thread_ts: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> ScheduleMessageResponse:
        params = self.message_params(
            channel_id, text,
            bot_name=bot_name, parse=parse, link_names=link_names, blocks=blocks,
            attachments=attachments, unfurl_links=unfurl_links, icon_url=icon_url,
            icon_emoji=icon_emoji, as_user=as_user, thread_ts=thread_ts, post_at=post_at,
        )
        return self.request("chat.scheduleMessage", ScheduleMessageResponse, params, callback)

    def chat_post_ephemeral(
        self,
        channel_id: str,
        text: str,
        target_user: str,
        parse: Optional[str] = None,
        link_names: bool = False,
        blocks: Optional[Sequence[Block]] = None,
        attachments: Optional[Sequence[Attachment]] = None,
        as_user: bool = False,
        thread_ts: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> PostEphemeralResponse:
        # as_user is always sent here, unlike chat.postMessage
        params = (
            ParamList(("channel", channel_id), ("text", text), ("user", target_user))
            .add_str("parse", parse)
            .add_if_true("link_names", link_names)
            .add_payload("blocks", blocks)
            .add_payload("attachments", attachments)
            .add_flag("as_user", as_user, BoolStyle.TITLE)
            .add_str("thread_ts", thread_ts)
        )
        return self.request("chat.postEphemeral", PostEphemeralResponse, params, callback)

    def dialog_open(self, trigger_id: str, dialog: Dialog, callback: Optional[Callback] = None) -> DialogOpenResponse:
        params = ParamList(("trigger_id", trigger_id), ("dialog", encode_payload(dialog)))
        return self.request("dialog.open", DialogOpenResponse, params, callback)

    def reactions_add(
        self,
        name: Optional[str] = None,
        channel: Optional[str] = None,
        timestamp: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> ReactionAddedResponse:
        params = ParamList().add_str("name", name).add_str("channel", channel).add_str("timestamp", timestamp)
        return self.request("reactions.add", ReactionAddedResponse, params, callback)

    def views_publish(self, user_id: str, view: View, callback: Optional[Callback] = None) -> AppHomeTabResponse:
        """Publish ``view`` as the user's App Home tab. The view type is forced to ``home``."""
        view = view.model_copy(update={"type": "home"})
        params = ParamList(("user_id", user_id), ("view", encode_payload(view)))
        return self.request("views.publish", AppHomeTabResponse, params, callback)

    # -- files ------------------------------------------------------------------

    def files_list(
        self,
        user_id: Optional[str] = None,
        ts_from: Optional[datetime] = None,
        ts_to: Optional[datetime] = None,
        count: Optional[int] = None,
        page: Optional[int] = None,
        types: Optional[Iterable[FileType]] = None,
        channel: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> FileListResponse:
        """List files. An empty or missing ``types`` set means every type."""
        params = (
            ParamList()
            .add_str("user", user_id)
            .add_timestamp("ts_from", ts_from)
            .add_timestamp("ts_to", ts_to)
            .add_str("types", file_types_param(types))
            .add_int("count", count)
            .add_int("page", page)
            .add_str("channel", channel)
        )
        return self.request("files.list", FileListResponse, params, callback)

    def files_info(
        self,
        file_id: str,
        page: Optional[int] = None,
        count: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> FileInfoResponse:
        params = ParamList(("file", file_id)).add_int("count", count).add_int("page", page)
        return self.request("files.info", FileInfoResponse, params, callback)

    def files_delete(self, file: Optional[str] = None, callback: Optional[Callback] = None) -> Optional[FileDeleteResponse]:
        """Delete a file. Without a file id nothing is sent and None is returned."""
        if not file:
            return None
        return self.request("files.delete", FileDeleteResponse, ParamList(("file", file)), callback)

    def files_get_upload_url_external(
        self, file_name: str, file_data: bytes, callback: Optional[Callback] = None
    ) -> GetUploadUrlExternalResponse:
        params = ParamList(("filename", file_name), ("length", len(file_data)))
        return self.request("files.getUploadURLExternal", GetUploadUrlExternalResponse, params, callback)

    @staticmethod
    def complete_upload_parts(
        file_id: str,
        title: str,
        channel_ids: Optional[Sequence[str]] = None,
        initial_comment: Optional[str] = None,
        thread_ts: Optional[str] = None,
    ) -> List[MultipartPart]:
        """Form parts for files.completeUploadExternal.

        One target channel goes out as ``channel_id``; two or more as a
        comma-joined ``channels``. Never both.
        """
        parts = [MultipartPart("files", encode_payload([{"id": file_id, "title": title}]))]
        if channel_ids:
            if len(channel_ids) == 1:
                parts.append(MultipartPart("channel_id", channel_ids[0]))
            else:
                parts.append(MultipartPart("channels", ",".join(channel_ids)))
        if initial_comment:
            parts.append(MultipartPart("initial_comment", initial_comment))
        if thread_ts:
            parts.append(MultipartPart("thread_ts", thread_ts))
        return parts

    def files_complete_upload_external(
        self,
        file_id: str,
        title: str,
        channel_ids: Optional[Sequence[str]] = None,
        initial_comment: Optional[str] = None,
        thread_ts: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> CompleteUploadExternalResponse:
        parts = self.complete_upload_parts(file_id, title, channel_ids, initial_comment, thread_ts)
        return self.post_form("files.completeUploadExternal", CompleteUploadExternalResponse, parts, callback)

    def upload_bytes(self, upload_url: str, file_name: str, file_data: bytes) -> str:
        """POST raw bytes to a one-time upload URL. Returns the body as-is."""
        return self.transport.post_multipart(
            upload_url, self.token, [MultipartPart("file", file_data, filename=file_name)]
        )

    def upload_file(
        self,
        file_data: bytes,
        file_name: str,
        channel_ids: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
        initial_comment: Optional[str] = None,
        thread_ts: Optional[str] = None,
        callback: Optional[Callback] = None,
        on_error: Optional[Callback] = None,
    ) -> UploadSession:
        """Upload a file in four steps and return the finished UploadSession.

        ``callback`` fires once with a FileUploadResponse when every step
        succeeded. When a step reports ``ok: false`` the upload is aborted,
        logged, and ``callback`` is not called; ``on_error`` (if given)
        receives the failing envelope instead.
        """
        return FileUploader(self).upload(
            file_data,
            file_name,
            channel_ids=channel_ids,
            title=title,
            initial_comment=initial_comment,
            thread_ts=thread_ts,
            callback=callback,
            on_error=on_error,
        )

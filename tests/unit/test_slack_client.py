import pytest
from datetime import datetime, timezone

from slack_rpc import SlackClient, TransportError, DecodeError, WorkspaceSnapshot
from slack_rpc.api.responses import ConversationsListResponse, PostMessageResponse
from slack_rpc.models import Dialog, DialogElement, View, Block, TextObject


def test_callback_invoked_once_with_decoded_response(client, transport):
    """
    WHY: The continuation contract is exactly-once delivery on the calling thread.
    HOW: Post a message with a callback collecting what it receives.
    EXPECTED: One invocation, with the same object the method returns.
    """
    transport.queue({"ok": True, "channel": "C1", "ts": "1700000000.000100"})
    received = []

    resp = client.chat_post_message("C1", "hello", callback=received.append, thread_ts="1699999999.000001")

    assert received == [resp]
    assert isinstance(resp, PostMessageResponse)
    assert resp.ts == "1700000000.000100"
    assert transport.calls[0][3] == [("channel", "C1"), ("text", "hello"), ("thread_ts", "1699999999.000001")]


def test_protocol_failure_reaches_callback(client, transport):
    transport.queue({"ok": False, "error": "channel_not_found"})
    received = []

    resp = client.conversations_list(callback=received.append)

    assert received == [resp]
    assert resp.ok is False
    assert resp.error == "channel_not_found"
    assert resp.channels is None


def test_transport_failure_propagates_and_skips_callback(client, transport):
    transport.queue(TransportError("connection reset", url="https://slack.com/api/auth.test"))
    received = []

    with pytest.raises(TransportError):
        client.auth_test(callback=received.append)
    assert received == []


def test_decode_failure_propagates_and_skips_callback(client, transport):
    transport.queue('{"channels": []}')
    received = []

    with pytest.raises(DecodeError):
        client.conversations_list(callback=received.append)
    assert received == []


def test_request_is_generic_over_response_model(client, transport):
    transport.queue({"ok": True, "channels": []})
    resp = client.request("conversations.list", ConversationsListResponse, [("limit", "5")])
    assert isinstance(resp, ConversationsListResponse)
    assert transport.calls[0] == ("GET", "conversations.list", "xoxb-test", [("limit", "5")])


def test_token_defaults_to_settings():
    from slack_rpc.config import Settings
    c = SlackClient(settings=Settings(SLACK_BOT_TOKEN="xoxb-from-env"), transport=object())
    assert c.token == "xoxb-from-env"


@pytest.mark.parametrize("channel_ids, expected_name, expected_value", [
    (["C1"], "channel_id", "C1"),
    (["C1", "C2"], "channels", "C1,C2"),
    (["C1", "C2", "C3"], "channels", "C1,C2,C3"),
])
def test_complete_upload_channel_target_asymmetry(client, transport, channel_ids, expected_name, expected_value):
    """
    WHY: files.completeUploadExternal takes `channel_id` for one target and `channels` for several.
    HOW: Register with one, two and three channel ids.
    EXPECTED: Exactly one of the two names is sent, with the right value.
    """
    transport.queue({"ok": True, "files": [{"id": "F1", "title": "t"}]})

    client.files_complete_upload_external("F1", "t", channel_ids)

    verb, target, token, parts = transport.calls[0]
    assert (verb, target) == ("POST", "files.completeUploadExternal")
    names = [p.name for p in parts]
    assert expected_name in names
    assert ("channel_id" in names) != ("channels" in names)
    assert dict((p.name, p.value) for p in parts)[expected_name] == expected_value


def test_complete_upload_parts():
    parts = SlackClient.complete_upload_parts("F1", "Report", ["C1"], "see attached", "1700000000.000100")
    assert [(p.name, p.value) for p in parts] == [
        ("files", '[{"id":"F1","title":"Report"}]'),
        ("channel_id", "C1"),
        ("initial_comment", "see attached"),
        ("thread_ts", "1700000000.000100"),
    ]
    assert [p.name for p in SlackClient.complete_upload_parts("F1", "Report")] == ["files"]


def test_files_delete_without_id_sends_nothing(client, transport):
    received = []
    assert client.files_delete("", callback=received.append) is None
    assert client.files_delete(None) is None
    assert transport.calls == []
    assert received == []


def test_files_delete(client, transport):
    transport.queue({"ok": True})
    assert client.files_delete("F1").ok
    assert transport.calls[0][1:] == ("files.delete", "xoxb-test", [("file", "F1")])


def test_views_publish_forces_home_type(client, transport):
    transport.queue({"ok": True, "view": {"id": "V1"}})
    view = View(type="modal", blocks=[Block(type="section", text=TextObject(text="hi"))])

    client.views_publish("U1", view)

    params = dict(transport.calls[0][3])
    assert params["user_id"] == "U1"
    assert params["view"].startswith('{"type":"home","blocks":')
    # caller's object is left alone
    assert view.type == "modal"


def test_dialog_open_encodes_dialog(client, transport):
    transport.queue({"ok": True})
    dialog = Dialog(title="T", callback_id="cb", elements=[DialogElement(type="text", label="L", name="n")])

    client.dialog_open("trig-1", dialog)

    assert transport.calls[0][3] == [
        ("trigger_id", "trig-1"),
        ("dialog", '{"title":"T","callback_id":"cb","elements":[{"type":"text","label":"L","name":"n"}]}'),
    ]


def test_chat_delete_and_mark_format_timestamps(client, transport):
    transport.queue({"ok": True, "ts": "1700000000.000100", "channel": "C1"}, {"ok": True})
    ts = datetime(2023, 11, 14, 22, 13, 20, 100, tzinfo=timezone.utc)

    deleted = client.chat_delete("C1", ts)
    client.conversations_mark("C1", ts)

    assert deleted.ts == "1700000000.000100"
    assert deleted.channel == "C1"

    assert transport.calls[0][3] == [("ts", "1700000000.000100"), ("channel", "C1")]
    assert transport.calls[1][3] == [("channel", "C1"), ("ts", "1700000000.000100")]


def test_schedule_message_sends_rounded_seconds(client, transport):
    """
    WHY: post_at is whole seconds; a fractional time rounds to the nearest one.
    HOW: Schedule at 22:13:20.999999 UTC.
    EXPECTED: post_at is sent as the next second, 1700000001.
    """
    transport.queue({"ok": True, "scheduled_message_id": "Q1", "post_at": 1700000001})
    post_at = datetime(2023, 11, 14, 22, 13, 20, 999999, tzinfo=timezone.utc)

    resp = client.chat_schedule_message("C1", "later", post_at, unfurl_links=True)

    assert resp.scheduled_message_id == "Q1"
    assert transport.calls[0][3] == [
        ("channel", "C1"), ("text", "later"), ("post_at", "1700000001"), ("unfurl_links", "true"),
    ]


def test_post_ephemeral_always_sends_as_user(client, transport):
    transport.queue({"ok": True, "message_ts": "1.000001"})
    client.chat_post_ephemeral("C1", "psst", "U2")
    assert transport.calls[0][3] == [("channel", "C1"), ("text", "psst"), ("user", "U2"), ("as_user", "False")]


def test_chat_update_params(client, transport):
    transport.queue({"ok": True, "ts": "1.000001", "channel": "C1", "text": "edited"})
    resp = client.chat_update("1.000001", "C1", "edited", bot_name="bot", link_names=True, as_user=True)
    assert (resp.ts, resp.channel, resp.text) == ("1.000001", "C1", "edited")
    assert transport.calls[0][3] == [
        ("ts", "1.000001"), ("channel", "C1"), ("text", "edited"),
        ("username", "bot"), ("link_names", "1"), ("as_user", "True"),
    ]


def test_search_params(client, transport):
    transport.queue({"ok": True, "messages": {"matches": []}})
    client.search_messages("deploy", sorting="timestamp", direction="desc", enable_highlights=True, count=5)
    assert transport.calls[0][1] == "search.messages"
    assert transport.calls[0][3] == [
        ("query", "deploy"), ("sort", "timestamp"), ("sort_dir", "desc"), ("highlight", "1"), ("count", "5"),
    ]


def test_history_variants_hit_their_methods(client, transport):
    transport.queue(*[{"ok": True, "messages": []}] * 4)
    client.conversations_history("C1", count=10)
    client.channels_history("C1")
    client.groups_history("G1")
    client.im_history("D1", unreads=None)
    assert transport.targets() == ["conversations.history", "channels.history", "groups.history", "im.history"]
    assert transport.calls[0][3] == [("channel", "C1"), ("count", "10"), ("unreads", "0")]
    assert transport.calls[3][3] == [("channel", "D1")]


def test_conversations_invite_joins_users(client, transport):
    transport.queue({"ok": True, "channel": {"id": "C1"}})
    client.conversations_invite("C1", ["U1", "U2"])
    assert transport.calls[0][3] == [("channel", "C1"), ("users", "U1,U2")]


def test_reactions_add_omits_empty(client, transport):
    transport.queue({"ok": True})
    client.reactions_add(name="thumbsup", channel="C1", timestamp="")
    assert transport.calls[0][3] == [("name", "thumbsup"), ("channel", "C1")]


def test_connect_returns_snapshot(client, transport):
    """
    WHY: Lookup tables come back from the handshake instead of living in shared client state.
    HOW: Connect against a canned login reply.
    EXPECTED: The callback gets the login envelope; the snapshot carries self/team.
    """
    transport.queue({"ok": True, "url": "wss://x", "self": {"id": "U0", "name": "bot"}, "team": {"id": "T0"}})
    received = []

    login, snapshot = client.connect(callback=received.append)

    assert received == [login]
    assert transport.calls[0][1] == "rtm.connect"
    assert transport.calls[0][3] == [("agent", "slack_rpc")]
    assert isinstance(snapshot, WorkspaceSnapshot)
    assert snapshot.self_user["id"] == "U0"
    assert snapshot.team == {"id": "T0"}
    assert snapshot.version == 1


def test_connect_failure_has_no_snapshot(client, transport):
    transport.queue({"ok": False, "error": "invalid_auth"})
    login, snapshot = client.connect(agent="custom")
    assert login.error == "invalid_auth"
    assert snapshot is None
    assert transport.calls[0][3] == [("agent", "custom")]


def test_post_message_takes_callback_after_full_options(client, transport):
    """
    WHY: Message options and the callback are separate named parameters.
    HOW: Post with every option set and pass the callback by keyword last.
    EXPECTED: All options reach the wire in order and the callback gets the envelope.
    """
    transport.queue({"ok": True, "ts": "1.000002", "channel": "C1", "message": {"text": "hi"}})
    received = []

    resp = client.chat_post_message(
        "C1", "hi",
        bot_name="bot", parse="full", link_names=True, unfurl_links=False,
        icon_url="https://example.com/i.png", icon_emoji=":robot_face:", as_user=False,
        thread_ts="1.000001", callback=received.append,
    )

    assert received == [resp]
    assert resp.ts == "1.000002"
    assert resp.message == {"text": "hi"}
    assert transport.calls[0][3] == [
        ("channel", "C1"), ("text", "hi"), ("username", "bot"), ("parse", "full"), ("link_names", "1"),
        ("unfurl_links", "false"), ("icon_url", "https://example.com/i.png"),
        ("icon_emoji", ":robot_face:"), ("as_user", "False"), ("thread_ts", "1.000001"),
    ]


def test_search_variants_hit_their_methods(client, transport):
    transport.queue(*[{"ok": True}] * 3)
    received = []
    client.search_all("q", page=2, callback=received.append)
    client.search_files("q")
    client.search_messages("q")
    assert transport.targets() == ["search.all", "search.files", "search.messages"]
    assert transport.calls[0][3] == [("query", "q"), ("page", "2")]
    assert len(received) == 1

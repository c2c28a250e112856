import httpx
import pytest
from unittest.mock import patch

from slack_rpc.api.transport import HttpTransport, MultipartPart
from slack_rpc.errors import TransportError


def _transport():
    return HttpTransport(base_url="https://slack.test/api", timeout=5.0, user_agent="tests/1.0")


def test_get_url_has_token_first_and_encodes_values():
    """
    WHY: The Web API is called as GET {base}/{method}?token=...&k=v with URL-encoded values.
    HOW: Build the URL for a method with values that need escaping and a duplicated key.
    EXPECTED: token first, parameters in order, duplicates kept, values escaped.
    """
    url = _transport().build_get_url(
        "chat.postMessage", "xoxb-1", [("channel", "C1"), ("text", "a&b c"), ("channel", "C2")]
    )
    assert url == "https://slack.test/api/chat.postMessage?token=xoxb-1&channel=C1&text=a%26b+c&channel=C2"


def test_get_returns_body_text():
    with patch("httpx.Client") as MockClient:
        instance = MockClient.return_value.__enter__.return_value
        instance.get.return_value.text = '{"ok":true}'

        body = _transport().get("auth.test", "xoxb-1", [])

        assert body == '{"ok":true}'
        instance.get.assert_called_once_with("https://slack.test/api/auth.test?token=xoxb-1")
        assert MockClient.call_args.kwargs["timeout"] == 5.0
        assert MockClient.call_args.kwargs["headers"]["User-Agent"] == "tests/1.0"


def test_get_does_not_interpret_status_codes():
    with patch("httpx.Client") as MockClient:
        instance = MockClient.return_value.__enter__.return_value
        instance.get.return_value.status_code = 500
        instance.get.return_value.text = "upstream error"

        assert _transport().get("auth.test", "xoxb-1") == "upstream error"


@pytest.mark.parametrize("exc", [
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
    httpx.RemoteProtocolError("reset"),
])
def test_network_failures_become_transport_errors(exc):
    """
    WHY: Callers only need to handle one exception type for network-level failures.
    HOW: Make the mocked client raise various httpx request errors.
    EXPECTED: TransportError carrying the method URL, chained to the original error.
    """
    with patch("httpx.Client") as MockClient:
        instance = MockClient.return_value.__enter__.return_value
        instance.get.side_effect = exc

        with pytest.raises(TransportError) as err:
            _transport().get("auth.test", "xoxb-1")

        assert err.value.url == "https://slack.test/api/auth.test"
        assert err.value.__cause__ is exc


def test_post_multipart_to_method_sends_bearer_token_and_text_parts():
    with patch("httpx.Client") as MockClient:
        instance = MockClient.return_value.__enter__.return_value
        instance.post.return_value.text = '{"ok":true}'

        body = _transport().post_multipart(
            "files.completeUploadExternal",
            "xoxb-1",
            [MultipartPart("files", '[{"id":"F1"}]'), MultipartPart("channel_id", "C1")],
        )

        assert body == '{"ok":true}'
        assert MockClient.call_args.kwargs["headers"]["Authorization"] == "Bearer xoxb-1"
        instance.post.assert_called_once_with(
            "https://slack.test/api/files.completeUploadExternal",
            files=[("files", (None, b'[{"id":"F1"}]')), ("channel_id", (None, b"C1"))],
        )


def test_post_multipart_to_absolute_upload_url():
    with patch("httpx.Client") as MockClient:
        instance = MockClient.return_value.__enter__.return_value
        instance.post.return_value.text = "OK - 3"

        body = _transport().post_multipart(
            "https://files.slack.com/upload/v1/abc", "xoxb-1", [MultipartPart("file", b"abc", filename="a.txt")]
        )

        assert body == "OK - 3"
        instance.post.assert_called_once_with(
            "https://files.slack.com/upload/v1/abc",
            files=[("file", ("a.txt", b"abc"))],
        )


def test_post_multipart_releases_client_on_error():
    """
    WHY: Multipart bodies and connections are scoped to the call, on every exit path.
    HOW: Raise from client.post inside the with-block.
    EXPECTED: TransportError is raised and the client's __exit__ still ran.
    """
    with patch("httpx.Client") as MockClient:
        ctx = MockClient.return_value
        ctx.__enter__.return_value.post.side_effect = httpx.WriteError("broken pipe")

        with pytest.raises(TransportError):
            _transport().post_multipart("files.completeUploadExternal", "xoxb-1", [MultipartPart("files", "[]")])

        ctx.__exit__.assert_called_once()

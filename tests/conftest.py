import json
import os
import pytest
from typing import Any, List, Tuple
from dotenv import load_dotenv

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))


class FakeTransport:
    """
    Stands in for HttpTransport. Replies are consumed in call order, whatever
    the verb; every call is recorded as (verb, target, token, payload).
    A reply that is an Exception instance is raised instead of returned.
    """

    def __init__(self, replies: List[Any] | None = None):
        self.replies = list(replies or [])
        self.calls: List[Tuple[str, str, str, Any]] = []

    def queue(self, *replies: Any) -> "FakeTransport":
        self.replies.extend(replies)
        return self

    def _next(self):
        if not self.replies:
            raise AssertionError("FakeTransport ran out of canned replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply

    def get(self, method, token, params=()):
        self.calls.append(("GET", method, token, list(params)))
        return self._next()

    def post_multipart(self, target, token, parts):
        self.calls.append(("POST", target, token, list(parts)))
        return self._next()

    def targets(self) -> List[str]:
        return [c[1] for c in self.calls]


@pytest.fixture
def transport():
    return FakeTransport()

@pytest.fixture
def client(transport):
    from slack_rpc import SlackClient
    return SlackClient(token="xoxb-test", transport=transport)

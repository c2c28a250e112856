"""HTTP transport for Web API calls.

GET requests carry the token and parameters in the query string. Multipart
POSTs are used for the raw byte upload and for files.completeUploadExternal.
Each call opens its own httpx.Client in a with-block, so the connection and
any request body are released on every exit path, exceptions included.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

import httpx

from ..config import get_settings
from ..errors import TransportError
from ..log import get_logger

logger = get_logger("transport")


@dataclass(frozen=True)
class MultipartPart:
    """One form part. A filename turns the part into a file upload."""

    name: str
    value: Union[str, bytes]
    filename: Optional[str] = None
    content_type: Optional[str] = None


class HttpTransport:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        settings = get_settings()
        base = base_url or settings.SLACK_API_BASE_URL
        self.base_url = base if base.endswith("/") else base + "/"
        self.timeout = timeout if timeout is not None else settings.SLACK_HTTP_TIMEOUT
        self.headers = {"User-Agent": user_agent or settings.SLACK_USER_AGENT}

    def method_url(self, method: str) -> str:
        return self.base_url + method.lstrip("/")

    def build_get_url(self, method: str, token: str, params: Iterable[Tuple[str, str]]) -> str:
        query = urlencode([("token", token), *params])
        return f"{self.method_url(method)}?{query}"

    def _resolve(self, target: str) -> str:
        # One-time upload URLs are absolute; everything else is a method name
        if target.startswith("http://") or target.startswith("https://"):
            return target
        return self.method_url(target)

    def get(self, method: str, token: str, params: Iterable[Tuple[str, str]] = ()) -> str:
        url = self.build_get_url(method, token, params)
        try:
            with httpx.Client(timeout=self.timeout, headers=self.headers) as client:
                resp = client.get(url)
                return resp.text
        except httpx.RequestError as e:
            logger.error(f"GET {method} failed: {e!r}")
            raise TransportError(f"GET {method} failed: {e}", url=self.method_url(method)) from e

    def post_multipart(
        self,
        target: str,
        token: Optional[str],
        parts: Sequence[MultipartPart],
    ) -> str:
        url = self._resolve(target)
        headers = dict(self.headers)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        files = _to_httpx_files(parts)
        try:
            with httpx.Client(timeout=self.timeout, headers=headers) as client:
                resp = client.post(url, files=files)
                return resp.text
        except httpx.RequestError as e:
            logger.error(f"POST {url} failed: {e!r}")
            raise TransportError(f"POST {url} failed: {e}", url=url) from e


def _to_httpx_files(parts: Sequence[MultipartPart]) -> List[Tuple[str, tuple]]:
    # Passing every part through `files` forces multipart/form-data even when
    # there is no binary part; a None filename makes a plain text field.
    files: List[Tuple[str, tuple]] = []
    for part in parts:
        value = part.value.encode("utf-8") if isinstance(part.value, str) else part.value
        if part.content_type:
            files.append((part.name, (part.filename, value, part.content_type)))
        else:
            files.append((part.name, (part.filename, value)))
    return files


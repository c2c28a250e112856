"""Four-step external file upload.

    REQUESTING_URL -> UPLOADING_BYTES -> REGISTERING_FILE -> FETCHING_INFO -> DONE

Any step that gets ``ok: false`` back moves the session to ABORTED instead.
Steps run one after another on the calling thread; the session lives only for
the duration of one upload() call.

Failure reporting: an aborted upload is logged on the ``upload`` logger and
the success callback is *not* called, so callers that only pass ``callback``
see nothing happen. Pass ``on_error`` (or inspect the returned session) to
observe the failure.

The byte upload step does not look at its reply; the session moves on to
registration whatever the upload URL answered. The reply text is kept in
``UploadSession.upload_ack``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from .api.dispatch import Callback, dispatch
from .api.responses import FileUploadResponse, Response
from .errors import UploadFailed
from .log import get_logger

logger = get_logger("upload")


class UploadState(str, Enum):
    REQUESTING_URL = "requesting_url"
    UPLOADING_BYTES = "uploading_bytes"
    REGISTERING_FILE = "registering_file"
    FETCHING_INFO = "fetching_info"
    DONE = "done"
    ABORTED = "aborted"


TERMINAL_STATES = frozenset({UploadState.DONE, UploadState.ABORTED})


@dataclass
class UploadSession:
    file_name: str
    file_data: bytes = field(repr=False)
    title: str
    channel_ids: List[str] = field(default_factory=list)
    initial_comment: Optional[str] = None
    thread_ts: Optional[str] = None

    upload_url: Optional[str] = None
    file_id: Optional[str] = None
    upload_ack: Optional[str] = None

    state: UploadState = UploadState.REQUESTING_URL
    history: List[UploadState] = field(default_factory=lambda: [UploadState.REQUESTING_URL])
    failed_step: Optional[UploadState] = None
    failure: Optional[Response] = None
    result: Optional[FileUploadResponse] = None

    @property
    def done(self) -> bool:
        return self.state is UploadState.DONE

    @property
    def aborted(self) -> bool:
        return self.state is UploadState.ABORTED

    @property
    def error(self) -> Optional[str]:
        return self.failure.error if self.failure is not None else None

    def advance(self, state: UploadState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Upload session already finished ({self.state.value})")
        self.state = state
        self.history.append(state)

    def raise_for_failure(self) -> None:
        if self.aborted:
            raise UploadFailed(self.failed_step.value if self.failed_step else "unknown", self.error)


class FileUploader:
    """Runs one UploadSession against a SlackClient."""

    def __init__(self, client):
        self.client = client
        self._steps: Dict[UploadState, Callable[[UploadSession], UploadState]] = {
            UploadState.REQUESTING_URL: self._request_url,
            UploadState.UPLOADING_BYTES: self._upload_bytes,
            UploadState.REGISTERING_FILE: self._register_file,
            UploadState.FETCHING_INFO: self._fetch_info,
        }

    def upload(
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
        session = UploadSession(
            file_name=file_name,
            file_data=file_data,
            title=title or file_name,
            channel_ids=list(channel_ids or []),
            initial_comment=initial_comment,
            thread_ts=thread_ts,
        )

        # TransportError / DecodeError from any step propagate from here
        while session.state not in TERMINAL_STATES:
            step = self._steps[session.state]
            session.advance(step(session))

        if session.done:
            dispatch(session.result, callback)
        elif on_error is not None:
            dispatch(session.failure, on_error)
        return session

    def _abort(self, session: UploadSession, response: Response, label: str) -> UploadState:
        session.failed_step = session.state
        session.failure = response
        logger.error(f"{label} error: {response.error}")
        return UploadState.ABORTED

    def _request_url(self, session: UploadSession) -> UploadState:
        resp = self.client.files_get_upload_url_external(session.file_name, session.file_data)
        if not resp.ok:
            return self._abort(session, resp, "upload")
        session.upload_url = resp.upload_url
        session.file_id = resp.file_id
        return UploadState.UPLOADING_BYTES

    def _upload_bytes(self, session: UploadSession) -> UploadState:
        session.upload_ack = self.client.upload_bytes(session.upload_url, session.file_name, session.file_data)
        logger.debug(f"Upload URL answered: {session.upload_ack!r}")
        return UploadState.REGISTERING_FILE

    def _register_file(self, session: UploadSession) -> UploadState:
        resp = self.client.files_complete_upload_external(
            session.file_id,
            session.title,
            session.channel_ids,
            session.initial_comment,
            session.thread_ts,
        )
        if not resp.ok:
            return self._abort(session, resp, "complete upload")
        if resp.files:
            session.file_id = resp.files[0].id
        return UploadState.FETCHING_INFO

    def _fetch_info(self, session: UploadSession) -> UploadState:
        resp = self.client.files_info(session.file_id)
        if not resp.ok:
            return self._abort(session, resp, "file info")
        session.result = FileUploadResponse(ok=True, file=resp.file)
        return UploadState.DONE

"""slack_rpc - a typed client for the Slack Web API.

Components:
- api: parameter assembly, payload encoding, transport, response decoding
- client: SlackClient with one method per Web API operation
- upload: the four-step external file upload
- snapshot: workspace lookup tables returned by the handshake
"""

from .client import SlackClient
from .errors import DecodeError, SlackRpcError, TransportError, UploadFailed
from .snapshot import WorkspaceSnapshot
from .upload import FileUploader, UploadSession, UploadState

__all__ = [
    "DecodeError",
    "FileUploader",
    "SlackClient",
    "SlackRpcError",
    "TransportError",
    "UploadFailed",
    "UploadSession",
    "UploadState",
    "WorkspaceSnapshot",
]

"""Request plumbing: parameter assembly, payload encoding, transport, decoding."""

from .dispatch import dispatch
from .params import BoolStyle, FileType, ParamList, file_types_param
from .payload import encode_payload
from .responses import Response, decode
from .timestamps import from_slack_ts, to_epoch_seconds, to_slack_ts
from .transport import HttpTransport, MultipartPart

__all__ = [
    "BoolStyle",
    "FileType",
    "HttpTransport",
    "MultipartPart",
    "ParamList",
    "Response",
    "decode",
    "dispatch",
    "encode_payload",
    "file_types_param",
    "from_slack_ts",
    "to_epoch_seconds",
    "to_slack_ts",
]

from .envelope import ErrorInfo, PageMeta, ResponseEnvelope
from .event import ClientEvent
from .payload import (
    FilePart,
    FilePathPayload,
    InMemoryPayload,
    MultipartPayload,
    UploadPayload,
    guess_content_type,
)

__all__ = [
    "ClientEvent",
    "ErrorInfo",
    "FilePart",
    "FilePathPayload",
    "InMemoryPayload",
    "MultipartPayload",
    "PageMeta",
    "ResponseEnvelope",
    "UploadPayload",
    "guess_content_type",
]

"""Upload payload variants

A file can be supplied either as a path on the local filesystem or as bytes
already held in memory. Both variants expose the same async read() so the
transport never has to probe where the content lives.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "json": "application/json",
    "txt": "text/plain",
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "ts": "text/typescript",
    "csv": "text/csv",
    "xml": "application/xml",
    "zip": "application/zip",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    "mp3": "audio/mpeg",
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    # Model formats
    "onnx": DEFAULT_CONTENT_TYPE,
    "pt": DEFAULT_CONTENT_TYPE,
    "pth": DEFAULT_CONTENT_TYPE,
    "h5": DEFAULT_CONTENT_TYPE,
    "pb": DEFAULT_CONTENT_TYPE,
    "tflite": DEFAULT_CONTENT_TYPE,
}


def guess_content_type(file_name: str) -> str:
    """Guess a MIME type from the file extension"""
    extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    return MIME_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True)
class FilePart:
    """A file ready to be encoded into a multipart body"""

    file_name: str
    content: bytes
    content_type: str

    def as_httpx_file(self) -> tuple[str, bytes, str]:
        return (self.file_name, self.content, self.content_type)


@dataclass(frozen=True)
class FilePathPayload:
    """File read from the local filesystem at upload time"""

    path: str | Path
    file_name: str | None = None
    content_type: str | None = None

    async def read(self) -> FilePart:
        path = Path(self.path)
        content = await asyncio.to_thread(path.read_bytes)
        name = self.file_name or path.name
        return FilePart(
            file_name=name,
            content=content,
            content_type=self.content_type or guess_content_type(name),
        )


@dataclass(frozen=True)
class InMemoryPayload:
    """File content already held in memory"""

    content: bytes
    file_name: str = "file"
    content_type: str | None = None

    async def read(self) -> FilePart:
        return FilePart(
            file_name=self.file_name,
            content=bytes(self.content),
            content_type=self.content_type
            or guess_content_type(self.file_name),
        )


UploadPayload = FilePathPayload | InMemoryPayload


@dataclass
class MultipartPayload:
    """Multipart form body: file fields plus plain form fields

    Attributes:
        files: Form field name -> file payload
        fields: Extra form fields (e.g. path, isPublic)
    """

    files: dict[str, UploadPayload] = field(default_factory=dict)
    fields: dict[str, str] = field(default_factory=dict)

    async def read_files(self) -> dict[str, tuple[str, bytes, str]]:
        """Resolve every file payload into httpx file tuples"""
        parts: dict[str, tuple[str, bytes, str]] = {}
        for name, payload in self.files.items():
            part = await payload.read()
            parts[name] = part.as_httpx_file()
        return parts

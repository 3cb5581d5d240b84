"""Tests for upload payload variants"""

import pytest

from nexus_client.domain.models.payload import (
    FilePathPayload,
    InMemoryPayload,
    MultipartPayload,
    guess_content_type,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "file_name,expected",
    [
        ("photo.JPG", "image/jpeg"),
        ("report.pdf", "application/pdf"),
        ("data.csv", "text/csv"),
        ("model.onnx", "application/octet-stream"),
        ("archive.tar.gz", "application/gzip"),
        ("README", "application/octet-stream"),
        ("weird.xyz", "application/octet-stream"),
    ],
)
def test_guess_content_type(file_name, expected):
    assert guess_content_type(file_name) == expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_file_path_payload_reads_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_bytes(b'{"layers": 12}')

    part = await FilePathPayload(path).read()

    assert part.file_name == "config.json"
    assert part.content == b'{"layers": 12}'
    assert part.content_type == "application/json"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_file_path_payload_overrides(tmp_path):
    path = tmp_path / "blob"
    path.write_bytes(b"abc")

    part = await FilePathPayload(
        str(path), file_name="weights.pt", content_type="application/x-torch"
    ).read()

    assert part.file_name == "weights.pt"
    assert part.content_type == "application/x-torch"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_file_path_payload_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        await FilePathPayload(tmp_path / "nope.bin").read()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_in_memory_payload_defaults():
    part = await InMemoryPayload(bytearray(b"raw")).read()

    assert part.file_name == "file"
    assert part.content == b"raw"
    assert part.content_type == "application/octet-stream"
    assert part.as_httpx_file() == ("file", b"raw", "application/octet-stream")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_multipart_payload_reads_all_files(tmp_path):
    path = tmp_path / "cover.png"
    path.write_bytes(b"png")

    payload = MultipartPayload(
        files={
            "cover": FilePathPayload(path),
            "notes": InMemoryPayload(b"hello", file_name="notes.txt"),
        },
        fields={"path": "docs"},
    )

    files = await payload.read_files()

    assert files == {
        "cover": ("cover.png", b"png", "image/png"),
        "notes": ("notes.txt", b"hello", "text/plain"),
    }
    assert payload.fields == {"path": "docs"}

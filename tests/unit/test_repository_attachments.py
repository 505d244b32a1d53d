"""
Test suite for Repository attachment operations.

Tests buffered and streamed uploads, revision propagation, and
downloads into bytes or a writable sink.

System role: Verification of the attachment gateway
"""

import io
from pathlib import Path
from typing import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from couchrepo.boundary.models.document import Document, WriteResult
from couchrepo.boundary.repository import Repository
from couchrepo.core.exceptions import DocumentNotFoundError, InvalidArgumentError


async def byte_chunks(*chunks: bytes) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


@pytest.fixture
def attachment_client(mock_store_client):
    """Store client acknowledging attachment uploads with revision 3-c."""
    mock_store_client.attachment_insert = AsyncMock(
        return_value=WriteResult(id="foo", rev="3-c")
    )
    return mock_store_client


class TestAddAttachment:
    """Tests for Repository.add_attachment()."""

    @pytest.mark.asyncio
    async def test_should_add_an_attachment_from_path(
        self,
        repository: Repository,
        attachment_client,
        saved_document: Document,
        fixtures_dir: Path,
    ) -> None:
        result, updated = await repository.add_attachment(
            saved_document, "my file", fixtures_dir / "file.txt", "text/plain"
        )

        attachment_client.attachment_insert.assert_awaited_once_with(
            "foo", "my file", b"hello attachment\n", "text/plain", "2-b"
        )
        assert updated.revision == result.rev == "3-c"
        assert saved_document.revision == "2-b"

    @pytest.mark.asyncio
    async def test_accepts_string_path(
        self, repository: Repository, attachment_client, saved_document: Document, temp_file: Path
    ) -> None:
        await repository.add_attachment(saved_document, "notes", str(temp_file), "text/plain")

        args = attachment_client.attachment_insert.await_args.args
        assert args[2] == b"test content"

    @pytest.mark.asyncio
    async def test_accepts_bytes(
        self, repository: Repository, attachment_client, saved_document: Document
    ) -> None:
        _, updated = await repository.add_attachment(
            saved_document, "blob", b"\x00\x00\x00", "application/octet-stream"
        )

        args = attachment_client.attachment_insert.await_args.args
        assert args[2] == b"\x00\x00\x00"
        assert updated.revision == "3-c"

    @pytest.mark.asyncio
    async def test_legacy_revision_field_is_used(
        self, repository: Repository, attachment_client
    ) -> None:
        document = Document.from_record({"_id": "foo", "rev": "9-z"})

        await repository.add_attachment(document, "blob", b"x", "text/plain")

        assert attachment_client.attachment_insert.await_args.args[4] == "9-z"

    @pytest.mark.asyncio
    async def test_missing_file_propagates(
        self, repository: Repository, attachment_client, saved_document: Document, fixtures_dir: Path
    ) -> None:
        with pytest.raises(FileNotFoundError):
            await repository.add_attachment(
                saved_document, "x", fixtures_dir / "nope.txt", "text/plain"
            )

        attachment_client.attachment_insert.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "document",
        [None, Document(_rev="2-b"), Document(_id="foo")],
    )
    async def test_requires_id_and_revision(
        self, repository: Repository, attachment_client, document
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            await repository.add_attachment(document, "x", b"x", "text/plain")

        attachment_client.attachment_insert.assert_not_called()


class TestStreamAttachment:
    """Tests for Repository.stream_attachment()."""

    @pytest.mark.asyncio
    async def test_should_receive_a_streamed_attachment(
        self, repository: Repository, attachment_client, saved_document: Document
    ) -> None:
        stream = byte_chunks(b"hello ", b"world")

        result, updated = await repository.stream_attachment(
            saved_document, "my file", stream, "text/plain"
        )

        attachment_client.attachment_insert.assert_awaited_once_with(
            "foo", "my file", stream, "text/plain", "2-b"
        )
        assert updated.revision == result.rev == "3-c"

    @pytest.mark.asyncio
    async def test_requires_revision(
        self, repository: Repository, attachment_client
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            await repository.stream_attachment(
                Document(_id="foo"), "x", byte_chunks(b"x"), "text/plain"
            )


class TestFindAttachment:
    """Tests for attachment downloads."""

    @pytest.mark.asyncio
    async def test_should_retrieve_an_attachment(
        self, repository: Repository, mock_store_client, saved_document: Document
    ) -> None:
        mock_store_client.attachment_get = AsyncMock(return_value=b"\x00\x00\x00")

        body = await repository.find_attachment(saved_document, "my file")

        mock_store_client.attachment_get.assert_awaited_once_with("foo", "my file")
        assert body == b"\x00\x00\x00"

    @pytest.mark.asyncio
    async def test_not_found_propagates(
        self, repository: Repository, mock_store_client, saved_document: Document
    ) -> None:
        mock_store_client.attachment_get = AsyncMock(side_effect=DocumentNotFoundError("foo"))

        with pytest.raises(DocumentNotFoundError):
            await repository.find_attachment(saved_document, "missing")

    @pytest.mark.asyncio
    async def test_should_stream_an_attachment(
        self, repository: Repository, mock_store_client, saved_document: Document
    ) -> None:
        mock_store_client.attachment_stream = MagicMock(
            return_value=byte_chunks(b"abc", b"def")
        )
        sink = io.BytesIO()

        written = await repository.stream_attachment_to(saved_document, "my file", sink)

        mock_store_client.attachment_stream.assert_called_once_with("foo", "my file")
        assert sink.getvalue() == b"abcdef"
        assert written == 6

    @pytest.mark.asyncio
    async def test_async_sink_writes_are_awaited(
        self, repository: Repository, mock_store_client, saved_document: Document
    ) -> None:
        mock_store_client.attachment_stream = MagicMock(return_value=byte_chunks(b"a", b"b"))
        sink = MagicMock()
        sink.write = AsyncMock()

        await repository.stream_attachment_to(saved_document, "my file", sink)

        assert sink.write.await_count == 2

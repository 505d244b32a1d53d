"""
Document store client contract.

Structural interface the repository depends on. CouchDBClient is the
production implementation; tests substitute AsyncMock instances.

Dependencies: typing
System role: Boundary between the repository and the database transport
"""

from typing import Any, AsyncIterable, AsyncIterator, Protocol, runtime_checkable

from couchrepo.boundary.models.document import WriteResult
from couchrepo.boundary.models.view import ViewResult

AttachmentContent = bytes | AsyncIterable[bytes]


@runtime_checkable
class DocumentStoreClient(Protocol):
    """Async operations a backing document database must provide."""

    @property
    def database_name(self) -> str:
        """Name of the backing database (collection)."""
        ...

    async def get(self, doc_id: str) -> dict[str, Any]:
        """Fetch a record; raises DocumentNotFoundError on a miss."""
        ...

    async def insert(self, record: dict[str, Any], doc_id: str | None = None) -> WriteResult:
        """Create or update a record, optionally under an explicit id."""
        ...

    async def destroy(self, doc_id: str, rev: str) -> WriteResult:
        """Delete a record at a given revision."""
        ...

    async def view(
        self,
        design_name: str,
        view_name: str,
        params: dict[str, Any] | None = None,
    ) -> ViewResult:
        """Execute a view of a design document."""
        ...

    async def attachment_insert(
        self,
        doc_id: str,
        name: str,
        content: AttachmentContent,
        mime_type: str,
        rev: str | None,
    ) -> WriteResult:
        """Upload an attachment from bytes or an async byte stream."""
        ...

    async def attachment_get(self, doc_id: str, name: str) -> bytes:
        """Download an attachment fully."""
        ...

    def attachment_stream(self, doc_id: str, name: str) -> AsyncIterator[bytes]:
        """Stream an attachment's bytes."""
        ...

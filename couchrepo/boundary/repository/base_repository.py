"""
Generic document repository.

Provides find/save/remove, attachment upload and download, and dispatch
to query methods generated from the database's declared views.
Subclass per database to add domain-specific helpers.

Dependencies: couchrepo.boundary.store, couchrepo.boundary.models
System role: Data-access layer over a CouchDB-style database
"""

import asyncio
import inspect
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterable, Awaitable

from couchrepo.boundary.models.design_document import SyncOutcome
from couchrepo.boundary.models.document import Document, WriteResult
from couchrepo.boundary.models.view import OnQueryError, QueryResult
from couchrepo.boundary.repository.design_sync import (
    DesignDocumentReconciler,
    LoadedDefinitions,
)
from couchrepo.boundary.repository.views import QueryCallback, QueryMethod, ViewRegistry, synthesize
from couchrepo.boundary.store.protocol import DocumentStoreClient
from couchrepo.core.exceptions import InvalidArgumentError, InvalidInvocationError

AttachmentSource = bytes | bytearray | memoryview | str | os.PathLike


class Repository:
    """
    Repository bound to one database of a document store.

    Query methods exist only after update_views() has loaded a definition
    file. They are reachable three ways: `repository.query("byName", key)`,
    `repository.views["byName"](key)` and `repository.findByName(key)`.

    Attributes:
        client: Store client all operations delegate to
        on_query_error: Error policy for generated query methods
    """

    def __init__(
        self,
        client: DocumentStoreClient,
        on_query_error: OnQueryError = OnQueryError.RETURN_EMPTY,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            client: Store client bound to the backing database
            on_query_error: What query methods do when a view call fails
            logger: Logger to use instead of the module logger

        Raises:
            InvalidArgumentError: If no client is given
        """
        if client is None:
            raise InvalidArgumentError(
                "Please pass a store client into your repository.", argument="client"
            )

        self.client = client
        self.on_query_error = OnQueryError(on_query_error)
        self._logger = logger or logging.getLogger(__name__)
        self._reconciler = DesignDocumentReconciler(client)
        self._registry = ViewRegistry()

    def __getattr__(self, name: str) -> QueryMethod:
        # Only reached when normal lookup fails; exposes findAll, findByName, ...
        registry = self.__dict__.get("_registry")
        if registry is not None and registry.has_method(name):
            return registry.by_method_name(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    @property
    def database_name(self) -> str:
        return self.client.database_name

    @property
    def views(self) -> ViewRegistry:
        """Registry of query methods installed by the last update_views()."""
        return self._registry

    # Views

    def _install_views(self, loaded: LoadedDefinitions) -> None:
        self._registry = synthesize(
            loaded.source.views,
            self.database_name,
            self.client,
            self.on_query_error,
        )

    async def update_views(self, view_file: str | os.PathLike[str]) -> SyncOutcome:
        """
        Install query methods for a definition file and sync the design document.

        Methods are installed before the store is contacted, so they remain
        available when the design document write fails.

        Args:
            view_file: JSON file of the form {"views": {name: body, ...}}

        Returns:
            SyncOutcome: CREATED, UPDATED or UNCHANGED

        Raises:
            OSError: If the file cannot be read
            ViewDefinitionError: If the file is malformed or view names collide
            StoreError: If reading or writing the design document fails
        """
        outcome = await self._reconciler.synchronize(view_file, self._install_views)
        self._logger.info(
            "View sync for database %s finished: %s", self.database_name, outcome.value
        )
        return outcome

    def query(
        self,
        view_name: str,
        *keys: Any,
        callback: QueryCallback | None = None,
    ) -> Awaitable[QueryResult]:
        """
        Run a declared view by name.

        The result must be awaited, also when a callback is given.

        Args:
            view_name: View declared in the last loaded definitions
            *keys: Optional keys to restrict the query to
            callback: Optional continuation receiving (error, values)

        Returns:
            Awaitable[QueryResult]: Normalized result

        Raises:
            InvalidInvocationError: If the view is not declared, or the call
                is otherwise malformed
        """
        if view_name not in self._registry:
            raise InvalidInvocationError(
                f"No view named {view_name!r} for database {self.database_name}",
                method_name=view_name,
            )
        return self._registry[view_name](*keys, callback=callback)

    # Documents

    async def find_by_id(self, doc_id: str) -> Document:
        """
        Fetch a document by id.

        Raises:
            DocumentNotFoundError: If the store has no such document
        """
        return Document.from_record(await self.client.get(doc_id))

    async def save(self, document: Document) -> Document:
        """
        Create or update a document.

        Stamps created_at on first save and updated_at on every later one.

        Args:
            document: Document to persist; not modified

        Returns:
            Document: Copy carrying the timestamps and store-assigned id/revision
        """
        now = datetime.now(timezone.utc)
        if document.created_at is None:
            stamped = document.model_copy(update={"created_at": now})
        else:
            stamped = document.model_copy(update={"updated_at": now})

        result = await self.client.insert(stamped.to_record())
        return stamped.model_copy(update={"id": result.id, "revision": result.rev})

    async def remove(self, document: Document | None) -> WriteResult:
        """
        Delete a document at its current revision.

        Raises:
            InvalidArgumentError: If the document is missing, or has no id or
                no revision; checked in that order before any I/O
        """
        if document is None:
            raise InvalidArgumentError("Document to remove was invalid!", argument="document")

        if not document.id:
            raise InvalidArgumentError("Document to remove had no id!", argument="_id")

        if not document.revision:
            raise InvalidArgumentError("Document to remove had no revision!", argument="_rev")

        return await self.client.destroy(document.id, document.revision)

    # Attachments

    @staticmethod
    def _require_attachable(document: Document | None, operation: str) -> Document:
        if document is None or not document.id:
            raise InvalidArgumentError(
                f"Document for {operation} had no id!", argument="_id"
            )
        return document

    async def add_attachment(
        self,
        document: Document,
        name: str,
        content: AttachmentSource,
        mime_type: str,
    ) -> tuple[WriteResult, Document]:
        """
        Upload an attachment from bytes or a file path.

        Args:
            document: Saved document to attach to
            name: Attachment name, unique within the document
            content: Raw bytes, or a path whose contents are read fully first
            mime_type: Content type stored with the attachment

        Returns:
            tuple[WriteResult, Document]: Store response and the document
                carrying its new revision

        Raises:
            InvalidArgumentError: If the document has no id or no revision
            OSError: If the file cannot be read
        """
        document = self._require_attachable(document, "attachment")
        if not document.revision:
            raise InvalidArgumentError("Document for attachment had no revision!", argument="_rev")

        if isinstance(content, (bytes, bytearray, memoryview)):
            data = bytes(content)
        else:
            data = await asyncio.to_thread(Path(content).read_bytes)

        result = await self.client.attachment_insert(
            document.id, name, data, mime_type, document.revision
        )
        return result, document.model_copy(update={"revision": result.rev})

    async def stream_attachment(
        self,
        document: Document,
        name: str,
        stream: AsyncIterable[bytes],
        mime_type: str,
    ) -> tuple[WriteResult, Document]:
        """
        Upload an attachment from an async byte stream without buffering it.

        Returns:
            tuple[WriteResult, Document]: Store response and the document
                carrying its new revision
        """
        document = self._require_attachable(document, "attachment")
        if not document.revision:
            raise InvalidArgumentError("Document for attachment had no revision!", argument="_rev")

        result = await self.client.attachment_insert(
            document.id, name, stream, mime_type, document.revision
        )
        return result, document.model_copy(update={"revision": result.rev})

    async def find_attachment(self, document: Document, name: str) -> bytes:
        """Download an attachment fully."""
        document = self._require_attachable(document, "attachment download")
        return await self.client.attachment_get(document.id, name)

    async def stream_attachment_to(self, document: Document, name: str, sink: Any) -> int:
        """
        Copy an attachment into a writable sink chunk by chunk.

        Args:
            document: Document owning the attachment
            name: Attachment name
            sink: Object with write(bytes); async write methods are awaited

        Returns:
            int: Number of bytes written
        """
        document = self._require_attachable(document, "attachment download")
        written = 0
        async for chunk in self.client.attachment_stream(document.id, name):
            outcome = sink.write(chunk)
            if inspect.isawaitable(outcome):
                await outcome
            written += len(chunk)
        return written

"""
Design document synchronization.

Reads a view definition file, fingerprints it, and brings the database's
design document in line with it. Writes only when the fingerprint differs
from the one stored alongside the current views.

Dependencies: couchrepo.boundary.store, couchrepo.core.fingerprint
System role: Keeps server-side views matching local definitions
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

from pydantic import ValidationError

from couchrepo.boundary.models.design_document import (
    DefinitionSource,
    DesignDocument,
    SyncOutcome,
    design_document_id,
)
from couchrepo.boundary.store.protocol import DocumentStoreClient
from couchrepo.core.exceptions import DocumentNotFoundError, ViewDefinitionError
from couchrepo.core.fingerprint import fingerprint
from couchrepo.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDefinitions:
    """Parsed definition source together with the fingerprint of its raw bytes."""

    source: DefinitionSource
    hash: str
    path: str


def parse_definitions(raw: bytes, path: str = "<memory>") -> LoadedDefinitions:
    """
    Parse and fingerprint a definition payload.

    Args:
        raw: File contents exactly as read
        path: Source label used in errors

    Returns:
        LoadedDefinitions: Parsed views plus fingerprint

    Raises:
        ViewDefinitionError: If the payload is not JSON or lacks a `views` object
    """
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ViewDefinitionError(f"View definitions are not valid JSON: {exc}", source=path) from exc

    if not isinstance(data, dict):
        raise ViewDefinitionError("View definitions must be a JSON object", source=path)

    try:
        source = DefinitionSource.model_validate(data)
    except ValidationError as exc:
        raise ViewDefinitionError(
            "View definitions must declare a `views` object",
            source=path,
            details={"errors": exc.errors(include_url=False)},
        ) from exc

    return LoadedDefinitions(source=source, hash=fingerprint(raw), path=path)


class DesignDocumentReconciler:
    """
    Reconciles local view definitions with a stored design document.

    Not safe for concurrent synchronize() calls on the same database;
    callers serialize them.
    """

    def __init__(self, client: DocumentStoreClient) -> None:
        self._client = client

    @property
    def design_id(self) -> str:
        return design_document_id(self._client.database_name)

    async def load(self, path: str | os.PathLike[str]) -> LoadedDefinitions:
        """
        Read and parse a definition file.

        Raises:
            OSError: Read failures are surfaced unchanged
            ViewDefinitionError: On malformed content
        """
        raw = await asyncio.to_thread(Path(path).read_bytes)
        return parse_definitions(raw, str(path))

    async def reconcile(self, loaded: LoadedDefinitions) -> SyncOutcome:
        """
        Create, update or leave the design document for loaded definitions.

        Args:
            loaded: Definitions and fingerprint from load()

        Returns:
            SyncOutcome: CREATED, UPDATED or UNCHANGED

        Raises:
            StoreError: Any store failure other than the design document being absent
        """
        database = self._client.database_name
        revision = None

        try:
            stored = DesignDocument.model_validate(await self._client.get(self.design_id))
        except DocumentNotFoundError:
            stored = None

        if stored is not None:
            if stored.hash == loaded.hash:
                log_with_context(
                    logger,
                    logging.INFO,
                    f"No view update required for database {database}",
                    database=database,
                    computed_hash=loaded.hash,
                )
                return SyncOutcome.UNCHANGED

            log_with_context(
                logger,
                logging.INFO,
                f"View definitions have changed - will update database {database}",
                database=database,
                stored_hash=stored.hash,
                computed_hash=loaded.hash,
            )
            revision = stored.revision

        payload = DesignDocument.from_source(database, loaded.source, loaded.hash, revision)
        await self._client.insert(payload.to_record(), self.design_id)

        return SyncOutcome.CREATED if stored is None else SyncOutcome.UPDATED

    async def synchronize(
        self,
        path: str | os.PathLike[str],
        on_loaded: Callable[[LoadedDefinitions], Awaitable[None] | None] | None = None,
    ) -> SyncOutcome:
        """
        Run a full synchronization cycle for a definition file.

        Args:
            path: View definition JSON file
            on_loaded: Hook run after parsing and before any store access;
                the repository installs its query methods here

        Returns:
            SyncOutcome: What happened to the stored design document
        """
        loaded = await self.load(path)
        if on_loaded is not None:
            outcome = on_loaded(loaded)
            if outcome is not None:
                await outcome
        return await self.reconcile(loaded)

"""
CouchDB HTTP client.

Implements DocumentStoreClient over CouchDB's REST API with httpx.
Maps HTTP failures onto the couchrepo exception hierarchy.

Dependencies: httpx
System role: Production store transport for the repository
"""

import logging
from typing import Any, AsyncIterator
from urllib.parse import quote

import httpx

from couchrepo.boundary.models.design_document import DESIGN_PREFIX
from couchrepo.boundary.models.document import WriteResult
from couchrepo.boundary.models.view import ViewResult
from couchrepo.boundary.store.protocol import AttachmentContent
from couchrepo.core.exceptions import (
    DocumentNotFoundError,
    RevisionConflictError,
    StoreError,
)

logger = logging.getLogger(__name__)


def encode_doc_id(doc_id: str) -> str:
    """
    Percent-encode a document id for use in a URL path.

    Design document ids keep their `_design/` separator unescaped.
    """
    if doc_id.startswith(DESIGN_PREFIX):
        return DESIGN_PREFIX + quote(doc_id[len(DESIGN_PREFIX):], safe="")
    return quote(doc_id, safe="")


class CouchDBClient:
    """
    Async CouchDB client bound to a single database.

    Owns an httpx.AsyncClient unless one is injected. Use as an async
    context manager or call aclose() when done.
    """

    def __init__(
        self,
        base_url: str,
        database: str,
        auth: tuple[str, str] | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize CouchDB client.

        Args:
            base_url: Server URL, e.g. http://localhost:5984
            database: Backing database name
            auth: Optional basic auth credentials
            timeout: Request timeout in seconds
            http_client: Preconfigured client (tests pass one with MockTransport)
        """
        self._database = database
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            auth=auth,
            timeout=timeout,
        )

    @property
    def database_name(self) -> str:
        return self._database

    async def __aenter__(self) -> "CouchDBClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def _doc_path(self, doc_id: str) -> str:
        return f"/{quote(self._database, safe='')}/{encode_doc_id(doc_id)}"

    def _attachment_path(self, doc_id: str, name: str) -> str:
        return f"{self._doc_path(doc_id)}/{quote(name, safe='')}"

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        doc_id: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StoreError(
                f"CouchDB {operation} request failed: {exc}",
                operation=operation,
            ) from exc
        self._raise_for_status(response, operation, doc_id)
        return response

    @staticmethod
    def _raise_for_status(
        response: httpx.Response,
        operation: str,
        doc_id: str | None = None,
    ) -> None:
        """
        Translate CouchDB error responses into couchrepo exceptions.

        Raises:
            DocumentNotFoundError: On 404
            RevisionConflictError: On 409
            StoreError: On any other 4xx/5xx
        """
        if response.status_code < 400:
            return

        reason = ""
        try:
            body = response.json()
            reason = body.get("reason") or body.get("error") or ""
        except ValueError:
            reason = response.text

        details = {"reason": reason} if reason else None
        if response.status_code == 404:
            raise DocumentNotFoundError(doc_id or str(response.url.path), details)
        if response.status_code == 409:
            raise RevisionConflictError(
                f"Revision conflict during {operation}",
                status_code=409,
                operation=operation,
                details=details,
            )
        raise StoreError(
            f"CouchDB {operation} failed with status {response.status_code}",
            status_code=response.status_code,
            operation=operation,
            details=details,
        )

    async def get(self, doc_id: str) -> dict[str, Any]:
        response = await self._request("GET", self._doc_path(doc_id), "get", doc_id)
        return response.json()

    async def insert(self, record: dict[str, Any], doc_id: str | None = None) -> WriteResult:
        """
        Create or update a record.

        Uses PUT when an id is known (explicit or `_id` in the record),
        otherwise POST so the server assigns one.
        """
        doc_id = doc_id or record.get("_id")
        if doc_id:
            response = await self._request(
                "PUT", self._doc_path(doc_id), "insert", doc_id, json=record
            )
        else:
            response = await self._request(
                "POST", f"/{quote(self._database, safe='')}", "insert", json=record
            )
        return WriteResult.model_validate(response.json())

    async def destroy(self, doc_id: str, rev: str) -> WriteResult:
        response = await self._request(
            "DELETE", self._doc_path(doc_id), "destroy", doc_id, params={"rev": rev}
        )
        return WriteResult.model_validate(response.json())

    async def view(
        self,
        design_name: str,
        view_name: str,
        params: dict[str, Any] | None = None,
    ) -> ViewResult:
        """
        Execute a view.

        `keys` travel in a POST body; no parameters issue a plain GET.
        """
        path = (
            f"/{quote(self._database, safe='')}/{DESIGN_PREFIX}"
            f"{quote(design_name, safe='')}/_view/{quote(view_name, safe='')}"
        )
        if params:
            response = await self._request("POST", path, "view", json=params)
        else:
            response = await self._request("GET", path, "view")
        return ViewResult.model_validate(response.json())

    async def attachment_insert(
        self,
        doc_id: str,
        name: str,
        content: AttachmentContent,
        mime_type: str,
        rev: str | None,
    ) -> WriteResult:
        request_params = {"rev": rev} if rev else None
        response = await self._request(
            "PUT",
            self._attachment_path(doc_id, name),
            "attachment_insert",
            doc_id,
            content=content,
            params=request_params,
            headers={"Content-Type": mime_type},
        )
        return WriteResult.model_validate(response.json())

    async def attachment_get(self, doc_id: str, name: str) -> bytes:
        response = await self._request(
            "GET", self._attachment_path(doc_id, name), "attachment_get", doc_id
        )
        return response.content

    async def attachment_stream(self, doc_id: str, name: str) -> AsyncIterator[bytes]:
        """
        Stream an attachment without buffering it.

        Yields:
            bytes: Chunks as delivered by the transport
        """
        try:
            async with self._http.stream("GET", self._attachment_path(doc_id, name)) as response:
                if response.status_code >= 400:
                    await response.aread()
                    self._raise_for_status(response, "attachment_stream", doc_id)
                async for chunk in response.aiter_bytes():
                    yield chunk
        except httpx.HTTPError as exc:
            raise StoreError(
                f"CouchDB attachment_stream request failed: {exc}",
                operation="attachment_stream",
            ) from exc

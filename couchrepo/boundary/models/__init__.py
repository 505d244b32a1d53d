"""
Pydantic models for documents, design documents and view results.
"""

from couchrepo.boundary.models.design_document import (
    DefinitionSource,
    DesignDocument,
    SyncOutcome,
    design_document_id,
)
from couchrepo.boundary.models.document import Document, WriteResult
from couchrepo.boundary.models.view import OnQueryError, QueryResult, ViewResult, ViewRow

__all__ = [
    "DefinitionSource",
    "DesignDocument",
    "Document",
    "OnQueryError",
    "QueryResult",
    "SyncOutcome",
    "ViewResult",
    "ViewRow",
    "WriteResult",
    "design_document_id",
]

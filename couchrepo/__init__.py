"""
couchrepo: generic repository over a CouchDB-style document database.

Exports the repository, the store client and the models callers handle.
"""

from couchrepo.boundary.models import (
    Document,
    OnQueryError,
    QueryResult,
    SyncOutcome,
    WriteResult,
)
from couchrepo.boundary.repository import Repository
from couchrepo.boundary.store import CouchDBClient, DocumentStoreClient

__all__ = [
    "CouchDBClient",
    "Document",
    "DocumentStoreClient",
    "OnQueryError",
    "QueryResult",
    "Repository",
    "SyncOutcome",
    "WriteResult",
]

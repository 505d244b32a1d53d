"""
Document store boundary: client protocol, CouchDB implementation and factory.
"""

from couchrepo.boundary.store.couchdb_client import CouchDBClient
from couchrepo.boundary.store.protocol import AttachmentContent, DocumentStoreClient

__all__ = ["AttachmentContent", "CouchDBClient", "DocumentStoreClient"]

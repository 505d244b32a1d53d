"""
Core domain primitives: exception hierarchy and content fingerprinting.
"""

from couchrepo.core.exceptions import (
    CouchRepositoryException,
    DocumentNotFoundError,
    InvalidArgumentError,
    InvalidInvocationError,
    PreconditionFailedError,
    RevisionConflictError,
    StoreError,
    ViewDefinitionError,
    ViewExecutionError,
)
from couchrepo.core.fingerprint import fingerprint

__all__ = [
    "CouchRepositoryException",
    "DocumentNotFoundError",
    "InvalidArgumentError",
    "InvalidInvocationError",
    "PreconditionFailedError",
    "RevisionConflictError",
    "StoreError",
    "ViewDefinitionError",
    "ViewExecutionError",
    "fingerprint",
]

"""
Repository layer: generic document repository, view query methods and
design document synchronization.

Usage:
    from couchrepo.boundary.repository import Repository

    repository = Repository(client)
    await repository.update_views("views/users.json")
    result = await repository.findByName("alice")
"""

from couchrepo.boundary.repository.base_repository import Repository
from couchrepo.boundary.repository.design_sync import (
    DesignDocumentReconciler,
    LoadedDefinitions,
    parse_definitions,
)
from couchrepo.boundary.repository.views import (
    QueryMethod,
    ViewRegistry,
    method_name_for,
    synthesize,
)

__all__ = [
    "DesignDocumentReconciler",
    "LoadedDefinitions",
    "QueryMethod",
    "Repository",
    "ViewRegistry",
    "method_name_for",
    "parse_definitions",
    "synthesize",
]

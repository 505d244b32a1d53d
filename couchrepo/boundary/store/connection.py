"""
Store client and repository construction.

Builds a CouchDBClient and a Repository from application settings.

Dependencies: couchrepo.configs, httpx
System role: Store connection lifecycle entry point
"""

from couchrepo.boundary.repository.base_repository import Repository
from couchrepo.boundary.store.couchdb_client import CouchDBClient
from couchrepo.boundary.store.protocol import DocumentStoreClient
from couchrepo.configs import Settings, get_settings
from couchrepo.configs.store import StoreSettings


def get_store_client(settings: StoreSettings | None = None) -> CouchDBClient:
    """
    Create a CouchDB client for the configured database.

    Args:
        settings: Store settings; defaults to the cached application settings

    Returns:
        CouchDBClient: Client owning its own httpx.AsyncClient

    Usage:
        async with get_store_client() as client:
            repository = Repository(client)
    """
    store = settings or get_settings().store
    return CouchDBClient(
        base_url=store.url,
        database=store.database,
        auth=store.auth,
        timeout=store.timeout,
    )


async def get_repository(
    settings: Settings | None = None,
    client: DocumentStoreClient | None = None,
) -> Repository:
    """
    Create a Repository configured from settings.

    Uses the configured query error policy and, when a view definitions
    path is set, synchronizes those views before returning.

    Args:
        settings: Application settings; defaults to the cached settings
        client: Store client to use; built from settings.store when omitted

    Returns:
        Repository: Repository ready for queries

    Raises:
        OSError: If the configured view file cannot be read
        ViewDefinitionError: If the configured view file is malformed
        StoreError: If the design document cannot be synchronized

    Usage:
        repository = await get_repository()
        try:
            result = await repository.findByName("alice")
        finally:
            await repository.client.aclose()
    """
    settings = settings or get_settings()
    owns_client = client is None
    if owns_client:
        client = get_store_client(settings.store)

    repository = Repository(client, on_query_error=settings.repository.on_query_error)
    if settings.repository.view_definitions_path:
        try:
            await repository.update_views(settings.repository.view_definitions_path)
        except Exception:
            if owns_client:
                await client.aclose()
            raise
    return repository

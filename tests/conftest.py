"""
Shared test fixtures and configuration for entire test suite.

Provides: store client mocks, repository instances, fixture file paths,
temp file cleanup
Dependencies: pytest, unittest.mock
System role: Test infrastructure and fixture management
"""

import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from couchrepo.boundary.models.document import Document, WriteResult
from couchrepo.boundary.models.view import ViewResult
from couchrepo.boundary.repository import Repository
from couchrepo.core.exceptions import DocumentNotFoundError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding view definition and attachment fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def view_file() -> Path:
    """View definitions declaring `all` and `byName`."""
    return FIXTURES_DIR / "view_definitions.json"


@pytest.fixture
def changed_view_file() -> Path:
    """View definitions differing from view_file."""
    return FIXTURES_DIR / "changed_view_definitions.json"


@pytest.fixture
def mock_store_client():
    """
    Create mock DocumentStoreClient bound to `test_database`.

    Returns:
        AsyncMock: Store client whose async methods are AsyncMocks
    """
    client = AsyncMock()
    client.database_name = "test_database"
    client.get = AsyncMock(side_effect=DocumentNotFoundError("missing"))
    client.insert = AsyncMock(return_value=WriteResult(id="_design/test_database", rev="1-a"))
    client.destroy = AsyncMock(return_value=WriteResult(id="foo", rev="3-c"))
    client.view = AsyncMock(return_value=ViewResult(rows=[]))
    return client


@pytest.fixture
def repository(mock_store_client) -> Repository:
    """Provide Repository over the mocked store client."""
    return Repository(mock_store_client)


@pytest.fixture
def saved_document() -> Document:
    """Document that has been persisted before."""
    return Document.model_validate(
        {"_id": "foo", "_rev": "2-b", "bar": "baz", "created_at": "2026-01-01T00:00:00Z"}
    )


@pytest.fixture
def temp_file():
    """
    Create a temporary file for attachment uploads.

    Yields:
        Path: Path to temporary file
    """
    with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
        temp_path = Path(f.name)
        f.write(b"test content")

    yield temp_path

    if temp_path.exists():
        temp_path.unlink()

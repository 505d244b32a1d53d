"""
Design document models.

The definition source parsed from disk and the design document persisted
for each backing database.

Dependencies: pydantic
System role: View definition persistence contracts
"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DESIGN_PREFIX = "_design/"


def design_document_id(database_name: str) -> str:
    """Return the design document id owned by a backing database."""
    return f"{DESIGN_PREFIX}{database_name}"


class DefinitionSource(BaseModel):
    """
    Parsed view definition file.

    Only `views` is interpreted; other top-level members (language,
    filters, validate_doc_update, ...) are carried into the design document.
    """

    model_config = ConfigDict(extra="allow")

    views: dict[str, Any]


class DesignDocument(BaseModel):
    """
    Design document holding a database's views and their fingerprint.

    Attributes:
        id: `_design/<database>`
        revision: Store revision, None before first creation
        views: View name to opaque view body
        hash: Fingerprint of the definition source the views came from
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(default=None, alias="_id")
    revision: str | None = Field(default=None, alias="_rev")
    views: dict[str, Any] = Field(default_factory=dict)
    hash: str | None = None

    @classmethod
    def from_source(
        cls,
        database_name: str,
        source: DefinitionSource,
        source_hash: str,
        revision: str | None = None,
    ) -> "DesignDocument":
        """
        Build the design document to persist for a definition source.

        Args:
            database_name: Backing database name
            source: Parsed definition source
            source_hash: Fingerprint of the raw source
            revision: Existing revision to carry forward on update

        Returns:
            DesignDocument: Payload with views, hash and optional revision
        """
        return cls.model_validate(
            {
                **source.model_dump(),
                "_id": design_document_id(database_name),
                "_rev": revision,
                "hash": source_hash,
            }
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize for the store; omits `_rev` on first creation, keeps everything else."""
        record = self.model_dump(by_alias=True)
        if record.get("_rev") is None:
            record.pop("_rev", None)
        return record


class SyncOutcome(str, enum.Enum):
    """Result of a design document synchronization."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"

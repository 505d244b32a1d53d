"""
Document domain models.

Stored records, store write acknowledgements and the revision field
convention shared by every repository operation.

Dependencies: pydantic
System role: Document persistence contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

LEGACY_REVISION_FIELD = "rev"

# Keys the store or the repository manages; omitted from records while unset
MANAGED_KEYS = ("_id", "_rev", "_attachments", "created_at", "updated_at")


class Document(BaseModel):
    """
    Arbitrary record stored in the backing database.

    Identity and revision are assigned by the store. Any field not declared
    here is kept as an extra and round-trips through the store unchanged.

    Attributes:
        id: Store identity (`_id`), None until first save
        revision: Current revision token (`_rev`), None until first save
        created_at: Set by the repository on first save
        updated_at: Set by the repository on every later save
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(default=None, alias="_id")
    revision: str | None = Field(default=None, alias="_rev")
    attachments: dict[str, Any] | None = Field(default=None, alias="_attachments")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_revision(cls, data: Any) -> Any:
        """
        Fold the legacy `rev` member into `_rev`.

        `_rev` wins when both are present; the legacy member is dropped either way.
        """
        if isinstance(data, dict) and LEGACY_REVISION_FIELD in data:
            data = dict(data)
            legacy = data.pop(LEGACY_REVISION_FIELD)
            if not data.get("_rev") and not data.get("revision"):
                data["_rev"] = legacy
        return data

    def to_record(self) -> dict[str, Any]:
        """
        Serialize to the JSON body the store expects.

        User fields are written as they are, None included, since the store
        replaces the whole record on every write.

        Returns:
            dict[str, Any]: Record using `_id`/`_rev` keys, unset managed keys omitted
        """
        record = self.model_dump(by_alias=True, mode="json")
        for key in MANAGED_KEYS:
            if record.get(key) is None:
                record.pop(key, None)
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Document":
        """Build a Document from a raw store record."""
        return cls.model_validate(record)


class WriteResult(BaseModel):
    """Acknowledgement returned by the store for any write."""

    model_config = ConfigDict(extra="allow")

    ok: bool = True
    id: str | None = None
    rev: str | None = None

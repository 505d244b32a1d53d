"""
View query models.

Raw view results as returned by the store and the normalized result
handed to callers of query methods.

Dependencies: pydantic, dataclasses
System role: View query contracts
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


class OnQueryError(str, enum.Enum):
    """
    Policy applied when a view call fails.

    RETURN_EMPTY logs the failure and returns an empty result carrying the
    error. PROPAGATE raises ViewExecutionError.
    """

    RETURN_EMPTY = "return_empty"
    PROPAGATE = "propagate"


class ViewRow(BaseModel):
    """Single row of a view result."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    key: Any = None
    value: Any = None


class ViewResult(BaseModel):
    """View response body."""

    model_config = ConfigDict(extra="allow")

    total_rows: int | None = None
    offset: int | None = None
    rows: list[ViewRow] = Field(default_factory=list)

    def values(self) -> list[Any]:
        """Return each row's value in original order."""
        return [row.value for row in self.rows]


@dataclass
class QueryResult:
    """
    Normalized output of a query method.

    `error` is set when the view call failed under RETURN_EMPTY; `values`
    is then empty, so callers must check `error` before trusting `values`.
    """

    values: list[Any] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]

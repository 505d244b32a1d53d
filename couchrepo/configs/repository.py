"""
Repository behaviour settings.

Dependencies: pydantic, pydantic_settings
System role: View synchronization and query error policy configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from couchrepo.boundary.models.view import OnQueryError
from couchrepo.configs.base import BaseSettings


class RepositorySettings(BaseSettings):
    """Settings for view synchronization and query dispatch."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REPOSITORY_",
        case_sensitive=False,
        extra="ignore",
    )

    view_definitions_path: str | None = Field(
        default=None,
        description="JSON file declaring the views for the backing database",
    )
    on_query_error: OnQueryError = Field(
        default=OnQueryError.RETURN_EMPTY,
        description="What a query method does when the view call fails (return_empty, propagate)",
    )

"""
Document store configuration settings.

Manages CouchDB connection parameters for the httpx-based store client.

Dependencies: pydantic, pydantic_settings
System role: Store connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from couchrepo.configs.base import BaseSettings


class StoreSettings(BaseSettings):
    """CouchDB server configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COUCHDB_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:5984", description="CouchDB server URL")
    database: str = Field(default="couchrepo", description="Backing database (collection) name")
    username: str | None = Field(default=None, description="Basic auth user")
    password: str | None = Field(default=None, description="Basic auth password")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    @property
    def auth(self) -> tuple[str, str] | None:
        """
        Basic auth credentials for httpx.

        Returns:
            tuple[str, str] | None: (username, password) when both are set
        """
        if self.username and self.password:
            return (self.username, self.password)
        return None

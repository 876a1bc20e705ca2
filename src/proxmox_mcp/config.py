"""Configuration for the Proxmox MCP server."""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging level for the server process."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ProxmoxConfig(BaseSettings):
    """Connection settings for a Proxmox VE cluster.

    Loaded from environment variables with the PROXMOX_ prefix or from a
    .env file. Credentials are not checked here; a missing password or
    token surfaces on the first authenticated request.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROXMOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(
        default="localhost",
        description="Proxmox VE host name or address",
    )
    port: int = Field(
        default=8006,
        ge=1,
        le=65535,
        description="Proxmox VE API port",
    )
    username: str = Field(
        default="root",
        description="User name, without the realm",
    )
    realm: str = Field(
        default="pam",
        description="Authentication realm (pam, pve, ...)",
    )
    password: str | None = Field(
        default=None,
        description="Password used for ticket authentication",
    )
    token_name: str | None = Field(
        default=None,
        description="API token id (the part after '!')",
    )
    token: str | None = Field(
        default=None,
        description="API token secret",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify the server TLS certificate",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )

    @property
    def base_url(self) -> str:
        """Root URL of the JSON API."""
        return f"https://{self.host}:{self.port}/api2/json"

    @property
    def user_id(self) -> str:
        """Fully qualified user id, e.g. root@pam."""
        return f"{self.username}@{self.realm}"

    @property
    def uses_token_auth(self) -> bool:
        """Whether a complete API token pair is configured."""
        return bool(self.token and self.token_name)

    def validate_auth_config(self) -> list[str]:
        """Check the credential settings.

        Returns:
            Human-readable warnings. Nothing here is fatal; requests fail
            later if no usable credential exists.
        """
        warnings: list[str] = []

        if bool(self.token) != bool(self.token_name):
            warnings.append(
                "Only one of PROXMOX_TOKEN and PROXMOX_TOKEN_NAME is set; "
                "API token authentication will not be used."
            )

        if not self.uses_token_auth and not self.password:
            warnings.append(
                "No password or API token configured. Set PROXMOX_PASSWORD or "
                "PROXMOX_TOKEN and PROXMOX_TOKEN_NAME."
            )

        if not self.verify_ssl:
            warnings.append(f"TLS certificate verification is disabled for {self.host}")

        return warnings


def get_config() -> ProxmoxConfig:
    """Resolve configuration from the environment."""
    return ProxmoxConfig()

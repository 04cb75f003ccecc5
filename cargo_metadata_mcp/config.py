"""Configuration management for the Cargo Metadata MCP server.

Uses Pydantic Settings for type-safe environment variable management.
All configuration can be overridden via environment variables or .env file.

Example:
    from cargo_metadata_mcp.config import settings

    print(settings.cargo_path)  # cargo
    print(settings.transport)   # stdio
"""

from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden by setting environment variables.
    For example: export CARGO_PATH=/opt/rust/bin/cargo
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ============================================================================
    # Cargo
    # ============================================================================

    cargo_path: str = Field(
        default="cargo", description="Cargo executable used to resolve metadata"
    )

    cargo_metadata_timeout_seconds: Optional[float] = Field(
        default=None,
        description="Timeout for `cargo metadata` (unset waits indefinitely)",
        gt=0,
    )

    cargo_offline: bool = Field(
        default=False, description="Pass --offline to cargo metadata"
    )

    cargo_no_deps: bool = Field(
        default=False,
        description="Pass --no-deps to cargo metadata (workspace members only)",
    )

    cargo_all_features: bool = Field(
        default=False, description="Pass --all-features to cargo metadata"
    )

    # ============================================================================
    # Cache
    # ============================================================================

    cache_per_manifest: bool = Field(
        default=False,
        description="Keep one snapshot per manifest path instead of the first one only",
    )

    # ============================================================================
    # MCP Server
    # ============================================================================

    server_name: str = Field(
        default="cargo-metadata", description="Name advertised to MCP clients"
    )

    transport: str = Field(
        default="stdio",
        alias="MCP_TRANSPORT",
        description="MCP transport (stdio, sse, streamable-http)",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # ============================================================================
    # Validators
    # ============================================================================

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()

        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")

        return v_upper

    @validator("transport")
    def validate_transport(cls, v):
        """Validate MCP transport name."""
        valid_transports = ["stdio", "sse", "streamable-http"]
        v_lower = v.lower()

        if v_lower not in valid_transports:
            raise ValueError(
                f"MCP_TRANSPORT must be one of: {', '.join(valid_transports)}"
            )

        return v_lower

    # ============================================================================
    # Computed Properties
    # ============================================================================

    @property
    def cargo_metadata_args(self) -> list:
        """Extra flags appended to every `cargo metadata` invocation."""
        args = []
        if self.cargo_offline:
            args.append("--offline")
        if self.cargo_no_deps:
            args.append("--no-deps")
        if self.cargo_all_features:
            args.append("--all-features")
        return args


# ============================================================================
# Global Settings Instance
# ============================================================================

settings = Settings()


# ============================================================================
# Utility Functions
# ============================================================================


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment variables.

    Useful for testing or when environment changes at runtime.

    Example:
        import os
        from cargo_metadata_mcp.config import reload_settings

        os.environ["CARGO_PATH"] = "/usr/local/bin/cargo"
        settings = reload_settings()
    """
    global settings
    settings = Settings()
    return settings

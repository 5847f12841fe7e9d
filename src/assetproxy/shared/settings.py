import os
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "BaseEnvSettings",
    "AppSettings",
    "app_settings",
    "ProxySettings",
    "proxy_settings",
]


class BaseEnvSettings(BaseSettings):
    """Base class for env settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )


class AppSettings(BaseEnvSettings):
    """Application configuration settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        description="Logging level to use.",
        alias="LOG_LEVEL",
        default="INFO"
    )


class ProxySettings(BaseEnvSettings):
    """
    Configuration of the manager proxy service.

    Covers the listener address, where manager plugins are discovered from,
    and the policies applied to the handle table.
    """
    host: str = Field(
        default="0.0.0.0",
        description="Address the proxy server binds to",
        alias="ASSETPROXY_HOST"
    )

    port: int = Field(
        default=50051,
        description="Port the proxy server listens on",
        alias="ASSETPROXY_PORT"
    )

    plugin_path: str = Field(
        default="",
        description="Search path for manager plugins, separated by os.pathsep",
        alias="ASSETPROXY_PLUGIN_PATH"
    )

    disable_entrypoint_plugins: bool = Field(
        default=False,
        description="Skip manager plugins advertised through package entry points",
        alias="ASSETPROXY_DISABLE_ENTRYPOINT_PLUGINS"
    )

    strict_destroy: bool = Field(
        default=False,
        description="Report Destroy of an unknown handle as a failed call",
        alias="ASSETPROXY_STRICT_DESTROY"
    )

    max_instances: Optional[int] = Field(
        default=None,
        description="Maximum number of live manager instances, unbounded if unset",
        alias="ASSETPROXY_MAX_INSTANCES"
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        """Validate port range"""
        if not 0 <= value <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {value}")
        return value

    @field_validator("max_instances", mode="before")
    @classmethod
    def validate_max_instances(cls, value):
        """Treat an empty value as unbounded and reject non-positive limits"""
        if value is None or value == "":
            return None
        if int(value) < 1:
            raise ValueError(f"Instance limit must be a positive integer, got {value}")
        return int(value)

    @property
    def plugin_paths(self) -> list[str]:
        """Plugin search path split into its directories, in precedence order."""
        return [entry for entry in self.plugin_path.split(os.pathsep) if entry]


# Initialize settings instances
try:
    app_settings = AppSettings()
    proxy_settings = ProxySettings()
except Exception as ex:
    print(f"Error loading configuration: {ex}")
    print("Please check your .env file and ensure all required variables are set.")
    raise

"""Configuration for the Splunk search client."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from splunk_mcp.splunk.exceptions import ConfigurationError


class SplunkConfig(BaseModel):
    """Connection and polling settings for a Splunk management endpoint."""

    username: str = "admin"
    password: str = Field(default="Password1", repr=False)
    scheme: str = "http"
    host: str = "localhost"
    port: int = 8089
    verify_ssl: bool = False
    connection_timeout: float = 30.0
    poll_interval: float = 1.0
    max_poll_attempts: int = 30
    results_page_size: int = 100

    model_config = {"frozen": True}

    def __init__(self, **data: Any) -> None:
        """Initialize configuration.

        Raises:
            ConfigurationError: If any setting is invalid
        """
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @field_validator("username", "host")
    @classmethod
    def validate_required(cls, v: str, info) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v.strip()

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        scheme = v.lower().strip()
        if scheme not in ("http", "https"):
            raise ValueError("scheme must be http or https")
        return scheme

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator(
        "connection_timeout", "poll_interval", "max_poll_attempts", "results_page_size"
    )
    @classmethod
    def validate_positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @property
    def base_url(self) -> str:
        """Management API root, e.g. ``https://splunk:8089``."""
        return f"{self.scheme}://{self.host}:{self.port}"

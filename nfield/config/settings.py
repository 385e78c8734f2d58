"""
SDK Settings
============

Connection and sample-program settings with environment variable support.
Supports development, testing, and production environments.
"""

from typing import Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NfieldSettings(BaseSettings):
    """Nfield SDK settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    # Server Configuration
    server_url: str = Field(default="http://localhost:81/v1", description="Nfield API base URL")
    request_timeout: float = Field(default=30.0, gt=0, description="Total request timeout in seconds")
    connect_timeout: float = Field(default=10.0, gt=0, description="Connect timeout in seconds")
    authentication_header: str = Field(
        default="X-AuthenticationToken", description="Response header carrying the session token"
    )

    # Credentials
    domain: str = Field(default="testdomain", description="Nfield domain")
    username: str = Field(default="user1", description="Nfield user name")
    password: str = Field(default="password123", description="Nfield password")

    # Sample Program Configuration
    sample_survey_id: str = Field(default="SomeSurveyId", description="Survey used for downloads")
    sample_sampling_point_survey_id: str = Field(
        default="some surveyId", description="Survey used for sampling point queries"
    )
    sample_script_survey_id: str = Field(
        default="surveyWithOdinScriptId", description="Survey with an uploaded ODIN script"
    )
    download_file_name: str = Field(default="MyFileName", description="Data download file name")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("Server URL must start with http:// or https://")
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="NFIELD_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> NfieldSettings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = NfieldSettings()
    return settings


def reload_settings() -> NfieldSettings:
    """Reload settings from environment."""
    global settings
    settings = NfieldSettings()
    return settings

"""Deployment settings for the container web application stack.

Settings are read from ``WEBAPP_``-prefixed environment variables (or a local
``.env`` file) and may be overridden per synth with CDK context values using
the same field names, e.g. ``cdk synth -c host_name=app``.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain_config import DomainConfig


class WebAppSettings(BaseSettings):
    """Configuration for synthesizing the web application stack.

    Args:
        app_name: Base name used for the stack name and resource tags.
        stage: Deployment stage, appended to the stack name.
        domain_name: Apex domain of the existing Route53 hosted zone.
        host_name: Host label served under the apex domain.
        image_tag: Tag pushed to the registry and referenced by the function.
        build_context: Directory containing the application Dockerfile.
        dockerfile: Dockerfile name inside the build context.
        function_memory_mb: Memory size of the Lambda function.
        function_timeout_seconds: Lambda timeout, capped at the API Gateway limit.
        aws_profile: Named profile used to resolve the target account.
        aws_region: Fallback region when none is supplied by the CDK CLI.
        enable_nag_checks: Attach AWS Solutions cdk-nag checks to the stack.
        log_level: Log level for synthesis.
        log_format: Logging format string.

    Returns:
        A validated settings object sourced from environment variables and defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="ContainerWebApp", description="Application name")
    stage: str = Field(default="dev", description="Deployment stage")

    # Domain Configuration
    domain_name: str = Field(default="example.com", description="Apex domain name")
    host_name: str = Field(default="www", description="Host label under the apex")

    # Image Configuration
    image_tag: str = Field(
        default="code-server-custom",
        min_length=1,
        max_length=128,
        description="Image tag pushed to ECR",
    )
    build_context: str = Field(
        default="webapp", description="Docker build context directory"
    )
    dockerfile: str = Field(default="Dockerfile", description="Dockerfile name")

    # Function Configuration
    function_memory_mb: int = Field(
        default=128, ge=128, le=10240, description="Lambda memory size in MB"
    )
    function_timeout_seconds: int = Field(
        default=3, ge=1, le=29, description="Lambda timeout in seconds"
    )

    # AWS Configuration
    aws_profile: Optional[str] = Field(
        default=None, description="AWS named profile for account resolution"
    )
    aws_region: str = Field(default="us-east-1", description="Fallback AWS region")

    enable_nag_checks: bool = Field(
        default=True, description="Enable AWS Solutions cdk-nag checks"
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept log levels in any case, e.g. ``WEBAPP_LOG_LEVEL=info``."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def load(cls, **kwargs: Any) -> WebAppSettings:
        """
        Load settings with optional overrides.

        Keyword arguments whose value is ``None`` are ignored so callers can
        pass optional CDK context lookups straight through.

        Args:
            **kwargs: Override values for settings

        Returns:
            WebAppSettings instance
        """
        return cls(**{key: value for key, value in kwargs.items() if value is not None})

    @property
    def stack_name(self) -> str:
        return f"{self.app_name}Stack-{self.stage}"

    def domain_config(self) -> DomainConfig:
        """Build the validated domain configuration."""
        return DomainConfig(apex_domain=self.domain_name, host_name=self.host_name)


_settings: Optional[WebAppSettings] = None


def get_settings() -> WebAppSettings:
    """
    Get the global settings instance.

    Returns:
        WebAppSettings instance
    """
    global _settings
    if _settings is None:
        _settings = WebAppSettings()
    return _settings


def update_settings(**kwargs: Any) -> WebAppSettings:
    """
    Replace the global settings instance with new values.

    Args:
        **kwargs: Settings to update

    Returns:
        Updated settings instance
    """
    global _settings
    _settings = WebAppSettings.load(**kwargs)
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This clears the cached singleton so the next call to get_settings will
    re-read the environment.
    """
    global _settings
    _settings = None

"""
Configuration for build_usher.

Uses pydantic-settings for environment variable management.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from build_usher.constants import DEFAULT_SPLIT_THRESHOLD


class UsherConfig(BaseSettings):
    """Configuration for the build usher Lambda."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_USHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for DynamoDB and Lambda",
    )

    # DynamoDB Configuration
    builds_table_name: str = Field(
        default="EtheriaBuildsUnified",
        description="DynamoDB table holding compressed builds",
    )
    global_vars_table_name: str = Field(
        default="EtheriaGlobalVars",
        description="DynamoDB table holding the per-version build indices",
    )

    # Geometry service
    geometry_function_name: str = Field(
        default="etheria_hexStringToBuild",
        description="Name or ARN of the hex-string-to-build Lambda",
    )
    invoke_read_timeout: int = Field(
        default=900,
        description="Read timeout in seconds for the geometry invocation",
        ge=1,
        le=900,
    )
    invoke_max_retries: int = Field(
        default=1,
        description="Retries the Lambda transport may make on its own",
        ge=0,
        le=10,
    )

    # Storage
    split_threshold: int = Field(
        default=DEFAULT_SPLIT_THRESHOLD,
        description=(
            "Compressed builds longer than this many characters are split "
            "across two records"
        ),
        ge=1,
    )
    index_update_attempts: int = Field(
        default=3,
        description="Conditional write attempts for the build index",
        ge=1,
        le=10,
    )

    # Endpoint override (for testing)
    endpoint_url: str | None = Field(
        default=None,
        description="Override DynamoDB endpoint URL (for local testing)",
    )


@lru_cache
def get_config() -> UsherConfig:
    """Get cached configuration instance."""
    return UsherConfig()

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_PLACEHOLDER_IMAGE = "static/placeholder-image.png"


class DatasetConfig(BaseModel):
    """Configuration for reference dataset access with Pydantic validation."""

    base_url: str = Field(
        default=DEFAULT_BASE_URL, min_length=1, description="Dataset API root"
    )
    timeout: float = Field(
        default=15.0, gt=0, description="Per-request timeout in seconds"
    )
    max_retries: int = Field(
        default=2, ge=0, description="Retries for transient failures"
    )
    retry_delay: float = Field(
        default=0.5, ge=0, description="Base delay between retries"
    )
    max_concurrency: int = Field(
        default=16, gt=0, description="Concurrent member fetches per roster build"
    )
    placeholder_image: str = Field(
        default=DEFAULT_PLACEHOLDER_IMAGE,
        min_length=1,
        description="Image returned when no artwork source is available",
    )
    user_agent: str = Field(default="pokerank/0.1", description="HTTP User-Agent")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

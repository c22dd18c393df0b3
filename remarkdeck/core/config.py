"""
Application settings using Pydantic for validation and type safety.
Security: All sensitive values loaded from environment variables.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration with validation and security best practices."""

    # Application
    app_name: str = Field(default="RemarkDeck", description="Application name")
    debug: bool = Field(default=False, description="Debug mode flag")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=7005, ge=1, le=65535, description="Server port")

    # Paths (relative to workspace root)
    data_dir: Path = Field(default=Path("data"), description="Data directory")

    @property
    def storage_dir(self) -> Path:
        """Get the directory holding persisted key-value slots."""
        return self.data_dir / "storage"

    # Azure OpenAI Configuration
    azure_openai_api_key: Optional[str] = Field(
        default=None,
        description="Azure OpenAI API key (sensitive, falls back to Entra ID when unset)"
    )
    azure_openai_endpoint: Optional[str] = Field(
        default=None,
        description="Azure OpenAI endpoint URL"
    )
    azure_openai_deployment: str = Field(
        default="gpt-4o",
        description="Azure OpenAI deployment name for deck generation"
    )
    azure_openai_api_version: str = Field(
        default="2024-10-21",
        description="Azure OpenAI API version"
    )

    # Moderation
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key used for the moderation endpoint (sensitive)"
    )
    moderation_model: str = Field(
        default="omni-moderation-latest",
        description="OpenAI moderation model"
    )

    # Input limits
    max_input_length: int = Field(
        default=2000,
        ge=1,
        le=100000,
        description="Maximum number of characters accepted as a deck topic"
    )

    # Result cache
    cache_max_entries: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Maximum number of decks kept in the local cache"
    )
    cache_slot: str = Field(
        default="ai-slides-cache",
        description="Storage slot holding the persisted deck cache"
    )

    # Rate limiting
    rate_limit_max_requests: int = Field(
        default=15,
        ge=1,
        description="Generation requests admitted per identity per window"
    )
    rate_limit_window_seconds: float = Field(
        default=3600,
        gt=0,
        description="Length of the rate limit window in seconds"
    )
    client_rate_limit_slot: str = Field(
        default="ai-slides-rate-limit",
        description="Storage slot holding the advisory client-side quota"
    )

    # Client
    api_base_url: str = Field(
        default="http://localhost:7005",
        description="Base URL the CLI client sends generation requests to"
    )
    request_timeout: int = Field(
        default=180,
        ge=10,
        le=600,
        description="Generation request timeout in seconds"
    )

    # Renderer
    remark_script_url: str = Field(
        default="https://remarkjs.com/downloads/remark-latest.min.js",
        description="URL of the remark.js bundle loaded by the presentation page"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @property
    def has_azure_openai(self) -> bool:
        """Check if Azure OpenAI is configured."""
        return bool(self.azure_openai_endpoint and self.azure_openai_deployment)

    @property
    def has_moderation(self) -> bool:
        """Check if the OpenAI moderation endpoint is configured."""
        return bool(self.openai_api_key)

    @property
    def llm_provider(self) -> str:
        """Get the active LLM provider name."""
        if self.has_azure_openai:
            return "azure"
        return "none"

    @field_validator("data_dir")
    @classmethod
    def validate_data_dir(cls, v: Path) -> Path:
        """Ensure data directory path is valid."""
        return Path(v)

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        for dir_path in [self.data_dir, self.storage_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        env_prefix = ""
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError

from mcp_relay.domain.exceptions.domain_exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Reasoning service (OpenAI-compatible endpoint)
    openai_api_key: str = Field(validation_alias="OPENAI_API_KEY", min_length=1)
    openai_base_url: str = Field(validation_alias="OPENAI_BASE_URL", min_length=1)
    openai_model: str = Field(default="qwen-plus", validation_alias="OPENAI_MODEL")

    # MCP client identity sent during initialization
    mcp_client_name: str = Field(
        default="mcp-client-cli", validation_alias="MCP_CLIENT_NAME"
    )
    mcp_client_version: str = Field(
        default="1.0.0", validation_alias="MCP_CLIENT_VERSION"
    )

    # Logging
    log_level: str = Field(default="WARNING", validation_alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def load_settings() -> Settings:
    """Build settings, reporting missing credentials as a ConfigurationError."""
    try:
        return Settings()
    except ValidationError as e:
        fields = sorted(
            {str(error["loc"][0]) for error in e.errors() if error.get("loc")}
        )
        raise ConfigurationError(
            f"Missing or invalid settings: {', '.join(fields)}"
        ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()

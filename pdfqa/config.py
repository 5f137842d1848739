"""
Configuration management for the PDF Q&A Backend.
Handles environment variables and application settings.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields from environment
    )

    # API Configuration
    app_name: str = Field(default="PDF Q&A Backend")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Google Gemini Configuration
    gemini_api_key: str = Field(default="")
    gemini_embedding_model: str = Field(default="models/embedding-001")
    gemini_chat_model: str = Field(default="gemini-1.5-flash")
    gemini_temperature: float = Field(default=0.1)

    # Vector Database Configuration (Qdrant)
    vector_database_url: str = Field(default="http://localhost:6333")
    vector_database_api_key: Optional[str] = Field(default=None)
    vector_database_index_name: str = Field(default="")
    vector_dimension: int = Field(default=768)

    # Chunking and retrieval
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)
    similarity_search_k: int = Field(default=5, gt=0)

    # File Processing Configuration
    max_file_size_mb: int = Field(default=50)

    # External provider calls
    provider_timeout_seconds: int = Field(default=30, gt=0)
    provider_max_attempts: int = Field(default=3, ge=1)
    provider_retry_initial_wait: float = Field(default=1.0, ge=0)
    provider_retry_max_wait: float = Field(default=10.0, ge=0)


# Global settings instance
settings = Settings()


def validate_required_settings(config: Optional[Settings] = None) -> None:
    """Validate that all required settings are present and consistent."""
    config = config or settings
    required_settings = [
        ("gemini_api_key", config.gemini_api_key),
        ("vector_database_index_name", config.vector_database_index_name),
    ]

    missing_settings = []
    for setting_name, setting_value in required_settings:
        if not setting_value:
            missing_settings.append(setting_name)

    if missing_settings:
        raise ValueError(
            f"Missing required environment variables: "
            f"{', '.join(name.upper() for name in missing_settings)}. "
            "Please check your .env file."
        )

    if config.chunk_overlap >= config.chunk_size:
        raise ValueError(
            f"CHUNK_OVERLAP ({config.chunk_overlap}) must be smaller than "
            f"CHUNK_SIZE ({config.chunk_size})"
        )

"""
Configuration management for WealthFolio.
Uses pydantic-settings for type-safe, centralized configuration.
"""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type safety.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'  # Allow extra fields in .env for flexibility
    )

    # Database
    database_url: str = "sqlite:///wealthfolio.db"
    db_echo: bool = False

    # Key-value storage
    storage_key_prefix: str = "wealthfolio"
    storage_version: str = "v3"  # Bump to abandon data stored under the old keys
    seed_default_assets: bool = True

    # LLM backend
    llm_mode: Literal["cloud", "local"] = "cloud"
    llm_temperature: float = 0.7

    # OpenAI / Cloud LLM Configuration
    openai_api_key: Optional[str] = None
    openai_model: Optional[str] = None
    openai_base_url: Optional[str] = None

    # Local LLM Configuration (Ollama)
    local_model: str = "qwen2.5:14b"
    local_llm_url: str = "http://localhost:11434/v1"

    # Advisory
    advisory_language: Literal["zh", "en"] = "zh"
    advisory_recent_transactions: int = 10

    # Aggregation
    other_direction_label: str = "其他"

    @property
    def assets_key(self) -> str:
        """Storage key for the asset collection."""
        return f"{self.storage_key_prefix}_assets_{self.storage_version}"

    @property
    def transactions_key(self) -> str:
        """Storage key for the transaction collection."""
        return f"{self.storage_key_prefix}_transactions_{self.storage_version}"

    @property
    def is_openai_configured(self) -> bool:
        """Check if OpenAI cloud mode is properly configured."""
        return all([
            self.openai_api_key,
            self.openai_model
        ])

    @property
    def is_advisory_configured(self) -> bool:
        """Local mode needs no credentials; cloud mode needs key and model."""
        if self.llm_mode == "local":
            return True
        return self.is_openai_configured


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings

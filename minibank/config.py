"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from typing import Optional
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MinibankConfig(BaseSettings):
    """minibank runtime configuration"""

    model_config = SettingsConfigDict(
        env_prefix="MINIBANK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Standard logging level name")
    log_format: str = Field(default="text", description="json or text")
    log_file: Optional[str] = None  # If None, logs to stderr

    # Registration harness
    max_prompt_attempts: Optional[int] = Field(
        default=None,
        ge=1,
        description="Prompts per field before giving up; None retries forever",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        log_format = value.lower()
        if log_format not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return log_format


# Global configuration instance
config = MinibankConfig()


def get_config() -> MinibankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> MinibankConfig:
    """Reload configuration from environment"""
    global config
    config = MinibankConfig()
    return config

"""Configuration management - settings from env, selection rules from YAML."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM (OpenAI-compatible)
    llm_base_url: str | None = Field(
        default="https://api.lkeap.tencentcloud.com/v1",
        description="OpenAI-compatible API base URL",
    )
    llm_api_key: str = Field(default="", description="API key for LLM provider")
    llm_model: str = Field(default="deepseek-v3", description="Model name")
    llm_temperature: str = Field(default="0.7", description="Sampling temperature, as text")
    llm_request_timeout_seconds: float = Field(
        default=300.0,
        description="Deadline for a single generation call",
    )

    # Data
    data_dir: Path = Field(default=Path("data"), description="Directory for JSON persistence")
    redis_url: str | None = Field(default=None, description="Redis URL for shared persistence")

    log_level: str = Field(default="INFO", description="Root log level")


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load YAML config file."""
    if not config_path.exists():
        return {}
    with config_path.open() as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


@lru_cache
def get_selection_rules(config_dir_str: str = "") -> dict[str, Any]:
    """Load selection limits and fallback texts. Missing keys fall back to coded defaults."""
    if not config_dir_str:
        config_dir = Path(__file__).parent.parent.parent / "config"
    else:
        config_dir = Path(config_dir_str)
    return load_yaml_config(config_dir / "selection_rules.yaml")


def configure_logging(level: str | None = None) -> None:
    """Root logging setup for processes embedding the engine."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format=LOG_FORMAT,
    )

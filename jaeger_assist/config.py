"""Configuration management for jaeger-assist."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "configs" / "default.yaml"


class LLMConfig(BaseModel):
    """Completion provider configuration."""

    provider: str = "mock"
    model: str = "claude-sonnet-4-20250514"
    temperature: float = 0.0
    query_max_tokens: int = 500
    explain_max_tokens: int = 800
    timeout: float = 60.0
    max_retries: int = 2


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
    file: str = ""


class Settings(BaseModel):
    """Root configuration for jaeger-assist."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    anthropic_api_key: str = ""


def load_config(path: str | Path | None = None) -> Settings:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        path: Path to YAML config file. Uses default if not provided.

    Returns:
        Validated Settings instance.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    raw: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    else:
        logger.warning("Config file not found at %s, using defaults", config_path)

    # Environment variable overrides
    api_key = os.environ.get("ANTHROPIC_API_KEY", "")
    if api_key:
        raw["anthropic_api_key"] = api_key

    provider = os.environ.get("LLM_PROVIDER", "")
    if provider:
        raw.setdefault("llm", {})["provider"] = provider

    level = os.environ.get("LOG_LEVEL", "")
    if level:
        raw.setdefault("logging", {})["level"] = level

    return Settings(**raw)


def setup_logging(config: LoggingConfig) -> None:
    """Configure logging from settings."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=config.format,
        handlers=handlers,
    )

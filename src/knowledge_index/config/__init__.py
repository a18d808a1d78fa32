"""Configuration management and settings."""

from knowledge_index.config.settings import IndexConfig, LogLevel, get_config, reload_config, set_config

__all__ = ["IndexConfig", "LogLevel", "get_config", "reload_config", "set_config"]

"""
Configuration management for the knowledge index.

Handles environment variables, configuration file loading, and provides
default settings with validation for loading, linking, and search.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from knowledge_index.models.exceptions import ConfigurationError, raise_config_error


class LogLevel(str, Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class IndexConfig(BaseSettings):
    """
    Central configuration class for the knowledge index.

    Every option can be overridden through a ``KNOWLEDGE_INDEX_`` prefixed
    environment variable or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="KNOWLEDGE_INDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        use_enum_values=True,
    )

    # === Context Tree Configuration ===
    context_path: Path | None = Field(
        default=None, description="Directory holding the collections (current directory if None)"
    )
    knowledge_dir: str = Field(default="knowledge", min_length=1, description="Knowledge collection directory name")
    tasks_dir: str = Field(
        default="task-templates", min_length=1, description="Task template collection directory name"
    )
    markdown_extension: str = Field(default=".md", description="Extension identifying markdown documents")

    # === Loading Configuration ===
    skip_unreadable_files: bool = Field(
        default=False, description="Skip files that cannot be read instead of aborting the collection load"
    )
    max_concurrent_reads: int = Field(default=8, ge=1, le=64, description="Maximum concurrent file reads")

    # === Linking Configuration ===
    warn_on_unresolved_dependencies: bool = Field(
        default=False, description="Log skipped dependency references at WARNING instead of DEBUG"
    )

    # === Search Configuration ===
    search_result_limit: int = Field(default=10, ge=1, le=100, description="Maximum number of ranked results")
    keyword_weight: float = Field(default=0.8, gt=0.0, le=1.0, description="Scale applied to keyword match ratio")
    similarity_threshold: float = Field(
        default=0.1, ge=0.0, lt=1.0, description="Similarity rating a document must exceed to be retained"
    )
    min_keyword_length: int = Field(default=3, ge=1, le=20, description="Shortest query token used for matching")

    # === Resource Configuration ===
    knowledge_uri_scheme: str = Field(default="knowledge", min_length=1, description="URI scheme for sections")

    # === Logging Configuration ===
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path (stderr if None)")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log message format"
    )
    debug_mode: bool = Field(default=False, description="Enable debug mode with verbose logging")

    @field_validator('markdown_extension')
    @classmethod
    def validate_markdown_extension(cls, v):
        """Ensure the extension starts with a dot."""
        if not v.startswith('.'):
            v = f'.{v}'
        return v

    @model_validator(mode='after')
    def validate_collection_dirs(self):
        """Ensure the two collections live in different directories."""
        if self.knowledge_dir == self.tasks_dir:
            raise ConfigurationError(
                "knowledge_dir and tasks_dir must differ",
                config_key="tasks_dir",
                expected_type="str != knowledge_dir",
                actual_value=self.tasks_dir,
            )
        return self

    def resolve_context_path(self) -> Path:
        """
        Resolve and validate the context root directory.

        Returns:
            Absolute path of the directory holding both collections

        Raises:
            ConfigurationError: If an explicit path is missing or not a directory
        """
        if self.context_path is None:
            return Path.cwd()

        path = self.context_path.expanduser().resolve()
        if not path.exists():
            raise_config_error(
                f"Context path does not exist: {path}",
                config_key="context_path",
                expected_type="existing directory",
                actual_value=path,
            )
        if not path.is_dir():
            raise_config_error(
                f"Context path is not a directory: {path}",
                config_key="context_path",
                expected_type="existing directory",
                actual_value=path,
            )
        return path

    def is_markdown_file(self, file_name: str) -> bool:
        """Check if a file name ends with the markdown extension (case-sensitive)."""
        return file_name.endswith(self.markdown_extension)

    def get_log_config(self) -> dict[str, Any]:
        """Get logging configuration dictionary."""
        level = LogLevel.DEBUG.value if self.debug_mode else LogLevel(self.log_level).value
        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.log_format}},
            "handlers": {
                "default": {
                    "level": level,
                    "formatter": "standard",
                    "class": "logging.StreamHandler" if not self.log_file else "logging.FileHandler",
                }
            },
            "loggers": {"knowledge_index": {"handlers": ["default"], "level": level, "propagate": False}},
        }

        if self.log_file:
            config["handlers"]["default"]["filename"] = str(self.log_file)
        else:
            # stdout belongs to the stdio transport
            config["handlers"]["default"]["stream"] = "ext://sys.stderr"

        return config


# Global configuration instance
_config: IndexConfig | None = None


def get_config() -> IndexConfig:
    """
    Get the global configuration instance.

    Creates a new instance on first call and reuses it for subsequent calls.
    """
    global _config
    if _config is None:
        _config = IndexConfig()
    return _config


def reload_config() -> IndexConfig:
    """Force reload the configuration from environment/files."""
    global _config
    _config = IndexConfig()
    return _config


def set_config(config: IndexConfig) -> None:
    """
    Set a custom configuration instance.

    Primarily used for testing or embedding the engine in another process.
    """
    global _config
    _config = config

"""folio configuration management."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from folio.errors import ConfigurationError

ENV_CONFIG_PATH = "FOLIO_CONFIG"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "FOLIO_PATHS_CONTENT_DIR": ("paths", "content_dir"),
    "FOLIO_PATHS_LOGS_DIR": ("paths", "logs_dir"),
    "FOLIO_LOG_LEVEL": ("logging", "level"),
}


class FolioConfig(BaseModel):
    """folio configuration model with validation."""

    class Paths(BaseModel):
        """Path configuration."""

        content_dir: Path = Field(
            default=Path("content/blog"),
            description="Directory containing the Markdown posts",
        )
        logs_dir: Path = Field(
            default=Path(".folio/logs"), description="Directory for log files"
        )

        @field_validator("*")
        @classmethod
        def expand_path(cls, v: Path) -> Path:
            """Expand user directory."""
            return v.expanduser()

        model_config = {"arbitrary_types_allowed": True}

    class Logging(BaseModel):
        """Logging configuration."""

        level: str = Field(default="INFO", description="Console log level")
        file: bool = Field(default=True, description="Also log to <logs_dir>/folio.log")

        @field_validator("level")
        @classmethod
        def known_level(cls, v: str) -> str:
            level = v.upper()
            if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                raise ValueError(f"unknown log level: {v}")
            return level

    paths: Paths = Field(default_factory=Paths)
    logging: Logging = Field(default_factory=Logging)


def _config_locations(config_path: str | Path | None) -> list[Path]:
    locations = []
    if config_path:
        locations.append(Path(config_path))
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        locations.append(Path(env_path))
    locations.append(Path("folio.yaml"))
    locations.append(Path("~/.config/folio/config.yaml"))
    return [loc.expanduser() for loc in locations]


def load_config(config_path: str | Path | None = None) -> FolioConfig:
    """Load configuration from file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default locations.

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If an explicitly named file is missing, or the
            file found is not valid YAML or fails validation
    """
    load_dotenv(Path.cwd() / ".env")

    if config_path and not Path(config_path).expanduser().exists():
        raise ConfigurationError(
            f"Config file not found: {config_path}", context={"path": str(config_path)}
        )

    # Load first existing config file
    config_data: dict[str, Any] = {}
    source: Path | None = None
    for path in _config_locations(config_path):
        if path.exists():
            source = path
            try:
                with open(path, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in config file: {e}",
                    context={"path": str(path)},
                    original_error=e,
                ) from e
            break

    if not isinstance(config_data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping", context={"path": str(source)}
        )

    # Override with environment variables
    for var, (section, key) in ENV_OVERRIDES.items():
        if var in os.environ:
            config_data.setdefault(section, {})[key] = os.environ[var]

    try:
        return FolioConfig(**config_data)
    except ValidationError as e:
        context = {"path": str(source)} if source else {}
        raise ConfigurationError(
            f"Invalid configuration: {e}", context=context, original_error=e
        ) from e

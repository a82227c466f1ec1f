import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by CUTOUT_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("CUTOUT_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "Cutout"
    version: str = "0.1.0"
    description: str = "Background removal and mirroring for anonymous uploads"


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from CUTOUT_LOG_FILE env var."""
        return os.environ.get("CUTOUT_LOG_FILE")


class TelemetryConfig(BaseModel):
    """Logfire instrumentation switches."""

    instrument: bool = True  # instrument FastAPI and httpx on startup


class IdentityConfig(BaseModel):
    """Anonymous identity cookie settings."""

    cookie_name: str = "uid"
    max_age: int = 31_536_000  # one year, in seconds
    same_site: Literal["lax", "strict", "none"] = "lax"
    secure: bool = True
    http_only: bool = True


class RemovalConfig(BaseModel):
    """remove.bg API configuration."""

    api_key: str = ""  # Must be set in production
    api_url: str = "https://api.remove.bg/v1.0/removebg"
    size: str = "auto"
    timeout: float = 30.0  # read timeout; removal of large images is slow


class VercelBlobConfig(BaseModel):
    """Vercel Blob HTTP API configuration."""

    token: str = ""  # BLOB_READ_WRITE_TOKEN of the store
    api_url: str = "https://blob.vercel-storage.com"
    api_version: str = "7"
    timeout: float = 15.0


class LocalStorageConfig(BaseModel):
    """Filesystem blob store, served by the app itself under /blobs."""

    path: str = "data/blobs"
    public_url: str = "http://localhost:8000/blobs"


class StorageConfig(BaseModel):
    """Blob store selection (nested in Config, uses env_nested_delimiter)."""

    backend: Literal["local", "vercel"] = "local"
    vercel: VercelBlobConfig = VercelBlobConfig()
    local: LocalStorageConfig = LocalStorageConfig()


class Config(BaseSettings):
    server: Server = Server()
    logging: LoggingConfig = LoggingConfig()
    telemetry: TelemetryConfig = TelemetryConfig()
    identity: IdentityConfig = IdentityConfig()
    removal: RemovalConfig = RemovalConfig()
    storage: StorageConfig = StorageConfig()

    model_config = {
        "env_prefix": "CUTOUT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows CUTOUT_REMOVAL__API_KEY override
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - CUTOUT_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so every module logger
    picks up the handlers.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.INFO)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)

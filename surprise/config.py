import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from surprise.cli.util.paths import SurprisePaths

MiB = 1024 * 1024


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by SURPRISE_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("SURPRISE_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "Digital Surprise"
    version: str = "0.1.0"
    description: str = "Share a photo or video with a message behind a link and a QR code"
    public_url: str = ""  # Base for share links; empty = use request Origin / base URL


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter).

    The url field uses empty string as sentinel to indicate "derive from SurprisePaths".
    When user doesn't override via SURPRISE_DATABASE__URL, we compute the actual path
    in Config's model_validator.
    """

    backend: Literal["sql", "memory"] = "sql"
    url: str = ""  # Empty string = derive from paths; explicit value = use as-is
    echo: bool = False
    auto_migrate: bool = True  # Auto-migrate for SQLite, manual for PostgreSQL


class S3Config(BaseModel):
    """S3-compatible object storage settings (storage.backend = "s3")."""

    bucket: str = ""
    region: str = "us-east-1"
    access_key: str = ""
    secret_key: str = ""
    endpoint_url: str | None = None  # For MinIO / R2 / other S3-compatible hosts
    public_url: str = ""  # Public base URL for objects; empty = virtual-hosted AWS URL


class StorageConfig(BaseModel):
    """Blob storage configuration (nested in Config, uses env_nested_delimiter)."""

    backend: Literal["local", "s3"] = "local"
    base_path: str = ""  # Empty string = derive from paths (local backend only)
    timeout: float = 30.0  # Seconds before a blob or record call is abandoned
    s3: S3Config = S3Config()


class UploadConfig(BaseModel):
    """Upload validation and slug generation."""

    max_file_size: int = 50 * MiB
    allowed_type_prefixes: list[str] = ["image/", "video/"]
    slug_length: int = 12
    slug_attempts: int = 3  # Total insert attempts before a slug collision is fatal


class QrCodeConfig(BaseModel):
    """Share-link QR code rendering."""

    size: int = 200  # Target edge length in pixels
    margin: int = 2  # Quiet zone, in modules
    error_correction: Literal["L", "M", "Q", "H"] = "L"


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from SURPRISE_LOG_FILE env var."""
        return os.environ.get("SURPRISE_LOG_FILE")


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    storage: StorageConfig = StorageConfig()
    uploads: UploadConfig = UploadConfig()
    qrcode: QrCodeConfig = QrCodeConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "SURPRISE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows SURPRISE_DATABASE__URL override
    }

    @model_validator(mode="after")
    def derive_paths(self) -> Self:
        """Derive database URL and blob directory from SurprisePaths if not set.

        SurprisePaths reads SURPRISE_DATA_DIR directly from environment, so one
        variable relocates both while explicit overrides still win.
        """
        paths = SurprisePaths()
        if not self.database.url:
            self.database = self.database.model_copy(
                update={"url": f"sqlite+aiosqlite:///{paths.database_file}"}
            )
        if not self.storage.base_path:
            self.storage = self.storage.model_copy(
                update={"base_path": str(paths.files_dir)}
            )
        return self

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
        4. yaml_settings - SURPRISE_CONFIG_FILE yaml
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

    Should be called early in application startup, before other modules
    are imported to ensure all loggers pick up the configuration.
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
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.INFO)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)

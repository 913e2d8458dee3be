"""Application settings and deployment configuration loading."""

import json
from pathlib import Path
from typing import Annotated

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from flare_edge.domain.deployment_models import DeploymentConfig
from flare_edge.domain.errors import ConfigError

DEFAULT_CONFIG_FILE = "flare-edge.config.json"


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    config_file: Path = Path(DEFAULT_CONFIG_FILE)
    project_dir: Path = Path(".")
    max_concurrent_uploads: int = 8
    release_delay_seconds: float = 1.0
    http_timeout_seconds: float = 60.0
    archive_exclude_patterns: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["node_modules/**"]
    )
    attachment_table_name: str = "x_elsr_fedge_project"
    log_level: str = "INFO"

    @field_validator("archive_exclude_patterns", mode="before")
    @classmethod
    def parse_csv_list(cls, value: object) -> object:
        """Support comma-separated env var values in addition to JSON arrays."""

        if not isinstance(value, str):
            return value
        if value.lstrip().startswith("["):
            return json.loads(value)
        return [item.strip() for item in value.split(",") if item.strip()]

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Ensure concurrency and timing settings are usable."""

        if self.max_concurrent_uploads < 1:
            raise ValueError("FLARE_EDGE_MAX_CONCURRENT_UPLOADS must be >= 1.")
        if self.release_delay_seconds < 0:
            raise ValueError("FLARE_EDGE_RELEASE_DELAY_SECONDS must be >= 0.")
        if self.http_timeout_seconds <= 0:
            raise ValueError("FLARE_EDGE_HTTP_TIMEOUT_SECONDS must be > 0.")
        if not self.attachment_table_name.strip():
            raise ValueError("FLARE_EDGE_ATTACHMENT_TABLE_NAME cannot be empty.")
        return self

    model_config = SettingsConfigDict(env_prefix="FLARE_EDGE_", extra="ignore")


def load_deployment_config(path: Path) -> DeploymentConfig:
    """Read and validate the JSON deployment document at `path`."""

    if not path.is_file():
        raise ConfigError(f"Configuration file '{path}' does not exist.")
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Error reading configuration file: {exc}") from exc

    try:
        return DeploymentConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"Error reading configuration file '{path}': {exc}") from exc


__all__ = ["DEFAULT_CONFIG_FILE", "Settings", "load_deployment_config"]

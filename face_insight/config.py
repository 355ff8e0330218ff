"""Application-wide configuration models and persistence helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_IMGUR_ENDPOINT = "https://api.imgur.com/3/image"
DEFAULT_AZURE_ENDPOINT = "https://eastus.api.cognitive.microsoft.com/face/v1.0"


class AppConfig(BaseModel):
    """Validates and stores runtime settings for the application."""

    imgur_endpoint: str = Field(
        default=DEFAULT_IMGUR_ENDPOINT,
        description="Upload endpoint of the Imgur image API.",
    )
    imgur_client_id: str = Field(
        default="",
        description="Imgur application client ID sent as 'Client-ID <id>'.",
    )
    azure_endpoint: str = Field(
        default=DEFAULT_AZURE_ENDPOINT,
        description="Base URL of the Azure Face API, without the /detect suffix.",
    )
    azure_api_key: str = Field(
        default="",
        description="Subscription key for the Azure Face API.",
    )
    request_timeout: float | None = Field(
        default=None,
        ge=1.0,
        le=600.0,
        description="Timeout (seconds) for HTTP calls. None leaves it to the transport.",
    )
    capture_width: int = Field(
        default=600,
        ge=1,
        le=4096,
        description="Width of the box captured photos are scaled into.",
    )
    capture_height: int = Field(
        default=600,
        ge=1,
        le=4096,
        description="Height of the box captured photos are scaled into.",
    )
    jpeg_quality: int = Field(
        default=92,
        ge=1,
        le=100,
        description="JPEG quality used when encoding captured photos.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level used by the command line entry point.",
    )

    @field_validator("imgur_endpoint", "azure_endpoint")
    @classmethod
    def _normalise_endpoint(cls, value: str) -> str:
        base = value.strip()
        if not base:
            raise ValueError("Endpoint URLs must not be empty.")
        if "://" not in base:
            raise ValueError("Endpoint URLs must include a scheme such as https://.")
        return base.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    def as_dict(self) -> dict[str, Any]:
        """Serialize the configuration to primitive Python types."""
        return self.model_dump(mode="json")

    @classmethod
    def load(cls, path: Path) -> AppConfig:
        """Load configuration from a YAML or JSON file."""
        data = _read_config_file(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:  # pragma: no cover - pass through details
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc

    def save(self, path: Path) -> None:
        """Persist configuration to a YAML or JSON file."""
        _write_config_file(path, self.as_dict())


_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


def _config_format(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return "yaml"
    if suffix in _JSON_SUFFIXES:
        return "json"
    raise ValueError(f"Unsupported settings file type {suffix or '(none)'!r} for {path}")


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    data = yaml.safe_load(text) if _config_format(path) == "yaml" else json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping.")
    return data


def _write_config_file(path: Path, data: dict[str, Any]) -> None:
    fmt = _config_format(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "yaml":
        text = yaml.safe_dump(data, allow_unicode=False, sort_keys=False)
    else:
        text = json.dumps(data, indent=2) + "\n"
    path.write_text(text, encoding="utf-8")

from dataclasses import dataclass
import os
from pathlib import Path
import re

import yaml

from codecov_mcp.client import (
    API_BASE_URL,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SERVICE,
    MAX_PAGE_SIZE,
    Service,
)
from codecov_mcp.exceptions import ConfigurationError


LOG_FORMATS = ("text", "json")

_ENV_REFERENCE = re.compile(r"\$\{[^}]+\}|\$[A-Za-z_][A-Za-z0-9_]*(?![A-Za-z0-9_])")


@dataclass(frozen=True)
class CodecovConfig:
    token: str
    service: Service = DEFAULT_SERVICE
    base_url: str = API_BASE_URL
    timeout: float | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    log_level: str = "INFO"
    log_format: str = "text"

    @staticmethod
    def _safe_parse_int(value: str, name: str, default: int) -> int:
        if not value:
            return default
        try:
            return int(value)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid integer value for {name}: '{value}'. Must be a valid integer."
            ) from e

    @staticmethod
    def _safe_parse_float(value: str, name: str) -> float | None:
        if not value:
            return None
        try:
            return float(value)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid float value for {name}: '{value}'. Must be a valid number."
            ) from e

    @staticmethod
    def _section(data: dict, key: str) -> dict:
        section = data.get(key) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Configuration section '{key}' must be a mapping"
            )
        return section

    @staticmethod
    def _parse_service(value: str | None) -> Service:
        if not value:
            return DEFAULT_SERVICE
        try:
            return Service(str(value).lower())
        except ValueError as e:
            supported = ", ".join(s.value for s in Service)
            raise ConfigurationError(
                f"Invalid service: {value}. Supported services: {supported}"
            ) from e

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigurationError(
                "CODECOV_API_TOKEN is required. Get your token from "
                "Codecov settings: Settings > Access > Generate Token"
            )
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(
                f"page_size must be between 1 and {MAX_PAGE_SIZE}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"log_format must be one of: {', '.join(LOG_FORMATS)}"
            )

    @classmethod
    def from_env(cls) -> "CodecovConfig":
        token = os.environ.get("CODECOV_API_TOKEN", "")
        if not token:
            raise ConfigurationError(
                "CODECOV_API_TOKEN environment variable is required"
            )

        return cls(
            token=token,
            service=cls._parse_service(os.environ.get("CODECOV_SERVICE")),
            base_url=os.environ.get("CODECOV_API_URL") or API_BASE_URL,
            timeout=cls._safe_parse_float(
                os.environ.get("CODECOV_TIMEOUT", ""), "CODECOV_TIMEOUT"
            ),
            page_size=cls._safe_parse_int(
                os.environ.get("CODECOV_PAGE_SIZE", ""),
                "CODECOV_PAGE_SIZE",
                DEFAULT_PAGE_SIZE,
            ),
            log_level=os.environ.get("CODECOV_LOG_LEVEL", "INFO"),
            log_format=os.environ.get("CODECOV_LOG_FORMAT", "text"),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "CodecovConfig":
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        if not data:
            raise ConfigurationError("Configuration file is empty")
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping")

        auth = cls._section(data, "authentication")
        token = auth.get("token")
        if not token:
            raise ConfigurationError("authentication.token not specified")
        if not isinstance(token, str):
            raise ConfigurationError("authentication.token must be a string")

        if _ENV_REFERENCE.search(token):
            expanded_token = os.path.expandvars(token)
            if _ENV_REFERENCE.search(expanded_token):
                # Don't reveal the token value in error message
                raise ConfigurationError(
                    "Token configuration error: Environment variable not found"
                )
            token = expanded_token

        performance = cls._section(data, "performance")
        pagination = cls._section(data, "pagination")
        logging = cls._section(data, "logging")

        timeout = performance.get("timeout")
        return cls(
            token=token,
            service=cls._parse_service(data.get("service")),
            base_url=data.get("base_url") or API_BASE_URL,
            timeout=cls._safe_parse_float(str(timeout), "performance.timeout")
            if timeout is not None
            else None,
            page_size=cls._safe_parse_int(
                str(pagination.get("page_size", "")),
                "pagination.page_size",
                DEFAULT_PAGE_SIZE,
            ),
            log_level=logging.get("level", "INFO"),
            log_format=logging.get("format", "text"),
        )

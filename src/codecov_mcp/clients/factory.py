from typing import Any, Protocol
from urllib.parse import urlparse

from codecov_mcp.client import MAX_PAGE_SIZE, CoverageClient, Service
from codecov_mcp.exceptions import ConfigurationError


class ClientConfig(Protocol):
    @property
    def token(self) -> str: ...
    @property
    def service(self) -> Service: ...
    @property
    def base_url(self) -> str: ...
    @property
    def timeout(self) -> float | None: ...
    @property
    def page_size(self) -> int: ...


class CoverageClientFactory:
    @staticmethod
    def _validate_token(token: str) -> None:
        if not token or not token.strip():
            raise ConfigurationError(
                "CODECOV_API_TOKEN is required. Set it as an environment variable."
            )
        if any(ch.isspace() for ch in token):
            raise ConfigurationError("Invalid token: contains whitespace")

    @staticmethod
    def _validate_service(service: Any) -> Service:
        try:
            return Service(service)
        except ValueError as e:
            supported = ", ".join(s.value for s in Service)
            raise ConfigurationError(
                f"Service '{service}' is not supported. "
                f"Supported services: {supported}"
            ) from e

    @staticmethod
    def _validate_base_url(base_url: str) -> None:
        parsed = urlparse(base_url)

        if parsed.scheme not in ("http", "https"):
            raise ConfigurationError(f"Invalid URL scheme: {parsed.scheme or '(none)'}")

        if not parsed.netloc:
            raise ConfigurationError("Invalid URL: missing host")

    @staticmethod
    def _validate_page_size(page_size: int) -> None:
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(
                f"page_size out of bounds: {page_size}. "
                f"Must be between 1 and {MAX_PAGE_SIZE}"
            )

    @staticmethod
    def create(config: ClientConfig) -> CoverageClient:
        CoverageClientFactory._validate_token(config.token)
        service = CoverageClientFactory._validate_service(config.service)
        CoverageClientFactory._validate_base_url(config.base_url)
        CoverageClientFactory._validate_page_size(config.page_size)

        from codecov_mcp.clients.codecov_client import CodecovClient

        return CodecovClient(
            token=config.token,
            default_service=service,
            base_url=config.base_url,
            timeout=config.timeout,
            page_size=config.page_size,
        )

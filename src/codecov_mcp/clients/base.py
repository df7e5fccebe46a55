from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import requests

from codecov_mcp.client import DEFAULT_SERVICE, CoverageClient, Service
from codecov_mcp.exceptions import (
    APIError,
    CodecovException,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
    TimeoutError,
    classify_http_error,
)
from codecov_mcp.logger import get_logger
from codecov_mcp.security import SecurityValidator


T = TypeVar("T")


@dataclass(frozen=True)
class ClientResult(Generic[T]):
    """Outcome of one backend call: a value or a classified error, never both."""

    value: T | None = None
    error: CodecovException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ClientResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CodecovException) -> "ClientResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class BaseCoverageClient(CoverageClient, ABC):
    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        default_service: Service = DEFAULT_SERVICE,
        timeout: float | None = None,
        logger: Any | None = None,
    ) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.default_service = Service(default_service)
        self.timeout = timeout
        self.logger = logger or get_logger(self.__class__.__name__)

    def _resolve_service(self, service: Service | str | None) -> Service:
        if service is None:
            return self.default_service
        return Service(service)

    @staticmethod
    def _query_params(**values: Any) -> dict[str, str | int]:
        """Drop absent values and render the rest the way the API expects."""
        params: dict[str, str | int] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            elif isinstance(value, list | tuple):
                if value:
                    params[key] = ",".join(str(item) for item in value)
            elif isinstance(value, str):
                if value:
                    params[key] = value
            else:
                params[key] = value
        return params

    def _error_from_response(self, response: requests.Response) -> CodecovException:
        detail: str | None = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            raw_detail = body.get("detail") or body.get("message")
            if raw_detail:
                detail = str(raw_detail)

        retry_after: int | None = None
        header = response.headers.get("Retry-After")
        if header and header.strip().isdigit():
            retry_after = int(header.strip())

        return classify_http_error(
            response.status_code,
            detail=detail,
            fallback=f"Request failed with status code {response.status_code}",
            retry_after=retry_after,
        )

    def _get(self, path: str, params: dict[str, str | int] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        self.logger.debug(f"GET {path} params={params or {}}")

        try:
            response = self.session.get(url, params=params or None, timeout=self.timeout)
        except requests.Timeout as e:
            raise TimeoutError(str(e)) from e
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                message="Codecov API returned a response that is not valid JSON",
                status_code=response.status_code,
            ) from e

    def _log_failure(self, path: str, error: CodecovException) -> None:
        message = SecurityValidator.sanitize_for_logging(error.message)
        if isinstance(error, RateLimitError | ResourceNotFoundError):
            self.logger.warning(f"GET {path} failed ({error.kind}): {message}")
        else:
            self.logger.error(f"GET {path} failed ({error.kind}): {message}")

    def _fetch(
        self,
        path: str,
        mapper: Callable[[Any], T],
        params: dict[str, str | int] | None = None,
    ) -> ClientResult[T]:
        try:
            data = self._get(path, params)
        except CodecovException as e:
            self._log_failure(path, e)
            return ClientResult.failure(e)

        try:
            return ClientResult.success(mapper(data))
        except ValueError as e:
            error = APIError(message=f"Unexpected response from Codecov API: {e}")
            self._log_failure(path, error)
            return ClientResult.failure(error)

from collections.abc import Callable
from dataclasses import dataclass
import time
from typing import Any

from pydantic import BaseModel, ValidationError

from codecov_mcp.client import CoverageClient
from codecov_mcp.clients.base import ClientResult
from codecov_mcp.logger import get_logger
from codecov_mcp.security import SecurityValidator


logger = get_logger("tools.registry")

FetchFn = Callable[[CoverageClient, Any], ClientResult[Any]]
SummarizeFn = Callable[[Any], str]
ClientProvider = Callable[[], CoverageClient]


@dataclass(frozen=True)
class OperationResult:
    text: str
    is_error: bool = False

    @classmethod
    def failure(cls, error: BaseException | str) -> "OperationResult":
        if isinstance(error, BaseException):
            message = SecurityValidator.sanitize_error_message(error)
        else:
            message = SecurityValidator.sanitize_for_logging(error)
        message = " ".join((message or "Unknown error").split())
        return cls(text=f"Error: {message}", is_error=True)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    params_model: type[BaseModel]
    fetch: FetchFn
    summarize: SummarizeFn


def _validation_message(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid input for '{field}': {first['msg']}" if field else first["msg"]


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        description: str,
        params_model: type[BaseModel],
        summarize: SummarizeFn,
    ) -> Callable[[FetchFn], FetchFn]:
        def decorator(fn: FetchFn) -> FetchFn:
            if name in self._tools:
                raise ValueError(f"Tool '{name}' is already registered")
            self._tools[name] = ToolSpec(
                name=name,
                description=description,
                params_model=params_model,
                fetch=fn,
                summarize=summarize,
            )
            return fn

        return decorator

    def get_all(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def execute(
        self,
        name: str,
        client_provider: ClientProvider,
        arguments: dict[str, Any],
    ) -> OperationResult:
        spec = self.get(name)
        if spec is None:
            return OperationResult.failure(f"Unknown tool: {name}")

        try:
            params = spec.params_model(**arguments)
        except ValidationError as e:
            logger.warning(f"{name}: {_validation_message(e)}")
            return OperationResult.failure(_validation_message(e))

        start = time.perf_counter()
        logger.debug(f"{name} started")
        try:
            result = spec.fetch(client_provider(), params)
            if not result.ok:
                return self._failed(name, result.error, start)
            text = spec.summarize(result.value)
        except Exception as e:
            logger.debug(f"{name} raised", exc_info=True)
            return self._failed(name, e, start)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"{name} completed in {elapsed_ms}ms")
        return OperationResult(text=text)

    @staticmethod
    def _failed(name: str, error: Any, start: float) -> OperationResult:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        outcome = OperationResult.failure(error)
        logger.warning(f"{name} failed in {elapsed_ms}ms: {outcome.text}")
        return outcome


registry = ToolRegistry()

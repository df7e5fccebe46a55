import threading

from codecov_mcp.client import CoverageClient
from codecov_mcp.clients.factory import CoverageClientFactory
from codecov_mcp.config import CodecovConfig
from codecov_mcp.logger import get_logger


logger = get_logger("app")


class CoverageApplication:
    """Owns the single shared coverage client, built once on first use."""

    def __init__(self, config: CodecovConfig, client: CoverageClient | None = None):
        self.config = config
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> CoverageClient:
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    logger.debug(
                        f"Creating Codecov client (service={self.config.service})"
                    )
                    self._client = CoverageClientFactory.create(self.config)
        return self._client

    @classmethod
    def from_env(cls) -> "CoverageApplication":
        return cls(CodecovConfig.from_env())

    @classmethod
    def from_file(cls, path: str) -> "CoverageApplication":
        return cls(CodecovConfig.from_file(path))

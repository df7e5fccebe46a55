import logging
import sys

import structlog


_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_JSON_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    structlog.processors.format_exc_info,
]


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_JSON_PRE_CHAIN,
        )
    return logging.Formatter(fmt=_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    # stdout carries the stdio transport, so logs always go to stderr
    logger = logging.getLogger("codecov_mcp")

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_formatter(log_format))
        logger.addHandler(handler)

    logger.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"codecov_mcp.{name}")

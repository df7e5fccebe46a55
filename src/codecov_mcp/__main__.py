import argparse
import os
import sys

from codecov_mcp.app import CoverageApplication
from codecov_mcp.exceptions import CodecovException, ConfigurationError
from codecov_mcp.logger import get_logger, setup_logging
from codecov_mcp.security import SecurityValidator
from codecov_mcp.server import TRANSPORTS, run_server


DEFAULT_PORT = 3000


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid port: {value}") from e
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(
            f"Invalid port: {value}. Use a number between 1-65535."
        )
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codecov-mcp-server",
        description="Codecov MCP Server - coverage data tools for AI agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Environment Variables:\n"
            "  CODECOV_API_TOKEN   Required. Your Codecov API token.\n"
            "  PORT                Alternative way to set the HTTP port.\n"
        ),
    )

    parser.add_argument(
        "--transport",
        "-t",
        choices=TRANSPORTS,
        default="stdio",
        help="Transport type: stdio (default) or http",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=_port,
        default=None,
        help=f"Port for HTTP transport (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides configuration)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        choices=["json", "text"],
        help="Logging format (overrides configuration)",
    )
    return parser


def resolve_port(args: argparse.Namespace) -> int:
    if args.port is not None:
        return int(args.port)
    env_port = os.environ.get("PORT")
    if args.transport == "http" and env_port:
        try:
            return _port(env_port)
        except argparse.ArgumentTypeError:
            return DEFAULT_PORT
    return DEFAULT_PORT


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logger = get_logger("main")

    try:
        if args.config:
            config_path = SecurityValidator.validate_config_path(args.config)
            app = CoverageApplication.from_file(str(config_path))
        else:
            app = CoverageApplication.from_env()

        setup_logging(
            args.log_level or app.config.log_level,
            args.log_format or app.config.log_format,
        )
        logger.info(f"Default service: {app.config.service}")

        run_server(
            app,
            transport=args.transport,
            host=args.host,
            port=resolve_port(args),
        )
    except ConfigurationError as e:
        setup_logging(args.log_level or "INFO", args.log_format or "text")
        sanitized_error = SecurityValidator.sanitize_error_message(e)
        logger.error(f"Configuration error: {sanitized_error}")
        sys.exit(1)
    except CodecovException as e:
        sanitized_error = SecurityValidator.sanitize_error_message(e)
        logger.error(f"Application error: {sanitized_error}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        sanitized_error = SecurityValidator.sanitize_error_message(e)
        logger.error(f"Unexpected error: {sanitized_error}")
        sys.exit(1)


if __name__ == "__main__":
    main()

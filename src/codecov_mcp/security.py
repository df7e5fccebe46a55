from pathlib import Path
import re

from codecov_mcp.exceptions import ConfigurationError


class SecurityValidator:
    CONFIG_SUFFIXES = {".yaml", ".yml"}
    MAX_CONFIG_SIZE = 1024 * 1024

    _REDACTIONS = [
        # URLs with embedded credentials
        (r"https?://[^:/\s]+:[^@\s]+@[^\s]+", "https://[REDACTED]@..."),
        (r"(Authorization|X-Api-Key):\s*Bearer\s+[^\s]+", r"\1: [REDACTED]"),
        (r"(Authorization|X-Api-Key):\s*[^\s]+", r"\1: [REDACTED]"),
        (r"Bearer\s+[A-Za-z0-9_\-\.=]+", "Bearer [REDACTED]"),
        (
            r"(password|token|secret|api_key|apikey|upload_token)=[^\s&]+",
            r"\1=[REDACTED]",
        ),
        # Codecov API and upload tokens are UUIDs
        (
            r"\b[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\b",
            "[TOKEN_REDACTED]",
        ),
        (r"eyJ[A-Za-z0-9_\-]+\.eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+", "[JWT_REDACTED]"),
    ]

    @staticmethod
    def validate_config_path(path: str) -> Path:
        if not path:
            raise ConfigurationError("Config path cannot be empty")

        resolved = Path(path).expanduser().resolve()
        if not resolved.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        if resolved.is_dir():
            raise ConfigurationError("Config path must be a file, not a directory")
        if resolved.suffix not in SecurityValidator.CONFIG_SUFFIXES:
            raise ConfigurationError("Config file must be .yaml or .yml")

        max_size = SecurityValidator.MAX_CONFIG_SIZE
        if resolved.stat().st_size > max_size:
            raise ConfigurationError(f"Config file too large (max {max_size} bytes)")

        return resolved

    @staticmethod
    def sanitize_for_logging(text: str) -> str:
        if not text:
            return text

        for pattern, replacement in SecurityValidator._REDACTIONS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)

        return text

    @staticmethod
    def sanitize_error_message(error: BaseException) -> str:
        message = getattr(error, "message", None) or str(error)
        return SecurityValidator.sanitize_for_logging(message)

"""
Configuration settings for the wordle client.

Everything comes from environment variables so the same build can point at
a local evaluator or the hosted one.

    WORDLE_API_URL           Evaluator base URL
    WORDLE_REQUEST_TIMEOUT   Seconds to wait for the evaluator (unset = forever)
    WORDLE_LOG_LEVEL         Logging level name
    ALLOWED_ORIGINS          Comma separated CORS origins for `serve`
    WORDLE_HOST/WORDLE_PORT  Bind address for `serve`
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os


DEFAULT_API_URL = "https://dar.southcentralus.cloudapp.azure.com/api"


@dataclass(frozen=True)
class Settings:
    """Validated client settings."""
    api_url: str = DEFAULT_API_URL
    request_timeout: float | None = None
    log_level: str = "INFO"
    allowed_origins: tuple[str, ...] = ("*",)
    host: str = "127.0.0.1"
    port: int = 8000

    def __post_init__(self):
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"WORDLE_API_URL must be an http(s) URL, got {self.api_url!r}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("WORDLE_REQUEST_TIMEOUT must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from the environment (or a given mapping)."""
        env = os.environ if environ is None else environ

        timeout = env.get("WORDLE_REQUEST_TIMEOUT")
        origins = env.get("ALLOWED_ORIGINS", "*")
        try:
            return cls(
                api_url=env.get("WORDLE_API_URL", DEFAULT_API_URL).rstrip("/"),
                request_timeout=float(timeout) if timeout else None,
                log_level=env.get("WORDLE_LOG_LEVEL", "INFO"),
                allowed_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
                host=env.get("WORDLE_HOST", "127.0.0.1"),
                port=int(env.get("WORDLE_PORT", "8000")),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid configuration: {e}") from e

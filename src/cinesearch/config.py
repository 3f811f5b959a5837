"""Configuration: frozen Config with an auto-resolved OMDb API key."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Literal
from urllib.parse import urlparse

from dotenv import load_dotenv

from cinesearch.errors import ConfigurationError

load_dotenv()

API_KEY_ENV_VAR = "OMDB_API_KEY"
DEFAULT_BASE_URL = "https://www.omdbapi.com/"

PlotLength = Literal["short", "full"]


@dataclass(frozen=True)
class Config:
    """Immutable configuration for the catalog repository.

    The API key is auto-resolved from ``OMDB_API_KEY`` when not passed.

    Example:
        config = Config()
        repository = create_repository(config)
    """

    #: Auto-resolved from ``OMDB_API_KEY`` when *None*.
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    #: Per-call timeout; expiry surfaces as a transport Failure.
    timeout_s: float = 10.0
    plot: PlotLength = "full"
    use_mock: bool = False

    def __post_init__(self) -> None:
        """Auto-resolve API key and validate configuration."""
        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds each catalog request in seconds.",
            )
        if self.plot not in ("short", "full"):
            raise ConfigurationError(
                f"Unknown plot length: {self.plot!r}",
                hint="Supported values: 'short', 'full'",
            )
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"base_url must be an absolute http(s) URL, got {self.base_url!r}",
            )

        if self.api_key is None and not self.use_mock:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR))

        if not self.use_mock and not self.api_key:
            raise ConfigurationError(
                "API key required for the OMDb catalog",
                hint=f"Set {API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(base_url={self.base_url!r}, timeout_s={self.timeout_s}, "
            f"api_key={'[REDACTED]' if self.api_key else None}, use_mock={self.use_mock})"
        )

    __repr__ = __str__

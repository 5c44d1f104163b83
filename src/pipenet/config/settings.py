"""Configuration settings using Pydantic Settings.

Provides typed limits and cache sizing with environment variable support.

Usage:
    from pipenet.config import PipeSettings

    # Load from environment variables (PIPES_*)
    settings = PipeSettings()

    # Or override with explicit values
    settings = PipeSettings(max_pipe_length=500, max_pipe_outputs=10)
"""

from __future__ import annotations

from pydantic import Field

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install pipenet"
    ) from e


class PipeSettings(BaseSettings):  # type: ignore[misc]
    """Limits for discovery and sizing for the primary index.

    Attributes:
        max_pipe_length: Maximum segment cells per network (0 = unlimited).
        max_pipe_outputs: Maximum outputs per network (0 = unlimited).
        pipe_cache_size: Capacity of the primary (input) index.
        pipe_cache_duration: Seconds a primary entry lives after its last
            write (0 = never expire).

    Environment Variables:
        PIPES_MAX_PIPE_LENGTH
        PIPES_MAX_PIPE_OUTPUTS
        PIPES_PIPE_CACHE_SIZE
        PIPES_PIPE_CACHE_DURATION
    """

    model_config = SettingsConfigDict(
        env_prefix="PIPES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_pipe_length: int = Field(default=0, ge=0)
    max_pipe_outputs: int = Field(default=0, ge=0)
    pipe_cache_size: int = Field(default=10_000, ge=1)
    pipe_cache_duration: float = Field(default=600.0, ge=0)

    def exceeds_length(self, count: int) -> bool:
        """Check whether `count` segments break the length limit."""
        return self.max_pipe_length > 0 and count > self.max_pipe_length

    def exceeds_outputs(self, count: int) -> bool:
        """Check whether `count` outputs break the output limit."""
        return self.max_pipe_outputs > 0 and count > self.max_pipe_outputs

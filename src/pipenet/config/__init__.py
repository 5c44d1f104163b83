"""Configuration module using Pydantic Settings.

Usage:
    from pipenet.config import PipeSettings

    settings = PipeSettings(max_pipe_length=200)
"""

from pipenet.config.settings import PipeSettings

__all__ = [
    "PipeSettings",
]

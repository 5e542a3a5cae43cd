"""Error types raised or returned by the settings store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ConfigError(Exception):
    """Base class for every settings store failure."""


class PathResolutionError(ConfigError):
    """The per-user config directory or file path could not be determined."""

    def __init__(self, name: str, cause: object) -> None:
        super().__init__(f"cannot get configuration file {name!r}: {cause}")
        self.name = name


class ConfigIOError(ConfigError, OSError):
    """The config file could not be read or written."""

    def __init__(self, path: Union[str, Path], message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = Path(path)


class ParseError(ConfigError, ValueError):
    """The config file is not valid JSON or not a JSON object of strings."""

    def __init__(self, path: Optional[Union[str, Path]], message: str) -> None:
        prefix = f"{path}: " if path is not None else ""
        super().__init__(f"{prefix}{message}")
        self.path = Path(path) if path is not None else None


class SerializationError(ConfigError, ValueError):
    """A settings record could not be encoded as JSON."""

"""Per-user login and endpoint settings for the turborepo CLI."""

from .errors import (
    ConfigError,
    ConfigIOError,
    ParseError,
    PathResolutionError,
    SerializationError,
)
from .settings import (
    ConfigStore,
    SettingsRecord,
    read_record,
    read_user_record,
    reset_user_record,
    write_record,
    write_user_record,
)

__all__ = [
    "ConfigError",
    "ConfigIOError",
    "ConfigStore",
    "ParseError",
    "PathResolutionError",
    "SerializationError",
    "SettingsRecord",
    "read_record",
    "read_user_record",
    "reset_user_record",
    "write_record",
    "write_user_record",
]

__version__ = "0.1.0"

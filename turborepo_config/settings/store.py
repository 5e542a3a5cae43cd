from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from ..errors import (
    ConfigError,
    ConfigIOError,
    ParseError,
    PathResolutionError,
    SerializationError,
)
from ..log_utils import redact_token
from ..paths import CONFIG_FILE_NAME, PathResolver, resolve_config_path
from .record import SettingsRecord

logger = logging.getLogger(__name__)

# owner read/write, no group/world access
FILE_MODE = 0o600

PathLike = Union[str, Path]
ReadResult = Tuple[SettingsRecord, Optional[ConfigError]]


def encode_record(record: SettingsRecord) -> bytes:
    """Compact JSON for ``record`` with empty fields left out."""
    try:
        txt = json.dumps(record.to_dict(), separators=(",", ":"), ensure_ascii=False)
        return txt.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot encode settings record: {e}") from e


def decode_record(raw: bytes, path: Optional[PathLike] = None) -> SettingsRecord:
    """Parse ``raw`` and merge it over the default record."""
    try:
        # invalid UTF-8 becomes U+FFFD instead of failing the whole file
        data = json.loads(raw.decode("utf-8", errors="replace"))
    except ValueError as e:
        raise ParseError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError(path, f"root is not an object (got {type(data).__name__})")
    try:
        return SettingsRecord.from_dict(data)
    except TypeError as e:
        raise ParseError(path, str(e)) from e


def write_record(path: PathLike, record: SettingsRecord) -> None:
    """Write ``record`` to ``path``, creating or truncating the file.

    The write is not atomic: concurrent writers race and the last one wins.
    """
    payload = encode_record(record)
    path = Path(path)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        # O_CREAT only applies the mode to new files
        if os.name == "posix":
            os.chmod(path, FILE_MODE)
    except OSError as e:
        raise ConfigIOError(path, e.strerror or str(e)) from e
    logger.debug(
        "wrote settings to %s (token=%s, team=%s)",
        path,
        redact_token(record.token),
        record.team_id or record.team_slug or "-",
    )


def read_record(path: PathLike) -> ReadResult:
    """Read the record at ``path``.

    Always returns a usable record. When the file is missing or unreadable
    the defaults come back paired with a :class:`ConfigIOError`; when it does
    not parse, with a :class:`ParseError`. Callers treat either as logged out.
    """
    path = Path(path)
    defaults = SettingsRecord.defaults()
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        logger.debug("no settings file at %s", path)
        return defaults, _io_error(path, e)
    except OSError as e:
        logger.warning("cannot read settings file %s: %s", path, e)
        return defaults, _io_error(path, e)

    try:
        record = decode_record(raw, path)
    except ParseError as e:
        logger.warning("ignoring malformed settings file: %s", e)
        return defaults, e
    return record, None


def _io_error(path: Path, e: OSError) -> ConfigIOError:
    err = ConfigIOError(path, e.strerror or str(e))
    err.__cause__ = e
    return err


@dataclass
class ConfigStore:
    """The current user's settings record.

    ``resolver`` locates the config directory; ``None`` uses the platform's
    per-user config dir. Every call resolves the path again.
    """

    filename: str = CONFIG_FILE_NAME
    resolver: Optional[PathResolver] = None

    def path(self) -> Path:
        return resolve_config_path(self.filename, self.resolver)

    def write_user_record(self, record: SettingsRecord) -> None:
        write_record(self.path(), record)

    def read_user_record(self) -> ReadResult:
        try:
            path = self.path()
        except PathResolutionError as e:
            logger.warning("%s", e)
            return SettingsRecord.defaults(), e
        return read_record(path)

    def reset_user_record(self) -> None:
        """Overwrite the stored record with an empty one.

        The file is kept and contains ``{}``; the URL defaults come back on
        the next read.
        """
        self.write_user_record(SettingsRecord())
        logger.info("settings reset")


def write_user_record(record: SettingsRecord) -> None:
    ConfigStore().write_user_record(record)


def read_user_record() -> ReadResult:
    return ConfigStore().read_user_record()


def reset_user_record() -> None:
    ConfigStore().reset_user_record()

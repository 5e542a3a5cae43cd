from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from platformdirs import user_config_dir

from .errors import PathResolutionError

logger = logging.getLogger(__name__)

CONFIG_NAMESPACE = "turborepo"
CONFIG_FILE_NAME = "config.json"


class PathResolver(Protocol):
    def resolve(self, namespace: str, filename: str) -> Path:
        """Return an absolute path for ``namespace/filename``, creating parent dirs."""
        ...


class PlatformDirsResolver:
    """Resolve config files under the platform's per-user config directory.

    Linux uses ``$XDG_CONFIG_HOME`` (``~/.config``), macOS
    ``~/Library/Application Support`` and Windows ``%APPDATA%``.
    """

    def resolve(self, namespace: str, filename: str) -> Path:
        base = Path(user_config_dir(namespace, appauthor=False))
        path = base / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.resolve()


class DirectoryResolver:
    """Resolve config files under a fixed root directory (tests, portable installs)."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def resolve(self, namespace: str, filename: str) -> Path:
        path = self.root / namespace / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.resolve()


def resolve_config_path(name: str, resolver: Optional[PathResolver] = None) -> Path:
    """Return the absolute path of config file ``name`` in the turborepo namespace.

    Raises :class:`PathResolutionError` naming the requested file when the
    resolver fails.
    """
    resolver = resolver or PlatformDirsResolver()
    try:
        path = resolver.resolve(CONFIG_NAMESPACE, name)
    except Exception as e:
        raise PathResolutionError(name, e) from e
    logger.debug("config file %r resolved to %s", name, path)
    return path

from __future__ import annotations

from pathlib import Path

import pytest

from turborepo_config.paths import DirectoryResolver
from turborepo_config.settings import ConfigStore


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(resolver=DirectoryResolver(tmp_path / "config"))

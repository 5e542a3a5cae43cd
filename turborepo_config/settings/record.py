from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

DEFAULT_API_URL = "https://api.vercel.com"
DEFAULT_LOGIN_URL = "https://vercel.com"

# attribute name -> JSON key, in serialization order
JSON_KEYS: Dict[str, str] = {
    "token": "token",
    "team_id": "teamId",
    "api_url": "apiUrl",
    "login_url": "loginUrl",
    "team_slug": "teamSlug",
}

# environment variable -> attribute name
ENV_OVERRIDES: Dict[str, str] = {
    "TURBO_API": "api_url",
    "TURBO_LOGIN": "login_url",
    "TURBO_TEAM": "team_slug",
}


@dataclass
class SettingsRecord:
    """The logged-in user's token, team and service URLs.

    A bare ``SettingsRecord()`` is the completely empty record (what a reset
    writes). Use :meth:`defaults` for the record a read starts from.
    """

    token: str = ""
    team_id: str = ""
    api_url: str = ""
    login_url: str = ""
    team_slug: str = ""

    @classmethod
    def defaults(cls) -> "SettingsRecord":
        return cls(api_url=DEFAULT_API_URL, login_url=DEFAULT_LOGIN_URL)

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token)

    def to_dict(self) -> Dict[str, str]:
        """JSON-ready mapping; empty fields are omitted."""
        out: Dict[str, str] = {}
        for attr, key in JSON_KEYS.items():
            value = getattr(self, attr)
            if value != "":
                out[key] = value
        return out

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], base: Optional["SettingsRecord"] = None
    ) -> "SettingsRecord":
        """Overlay the known keys of ``data`` onto ``base`` (defaults if None).

        Absent keys keep the base value, present empty strings overwrite it.
        Unknown keys and ``null`` values are ignored. Raises ``TypeError`` for
        other non-string values.
        """
        base = base if base is not None else cls.defaults()
        patch: Dict[str, str] = {}
        for attr, key in JSON_KEYS.items():
            if key not in data:
                continue
            value = data[key]
            if value is None:
                continue
            if not isinstance(value, str):
                raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
            patch[attr] = value
        return replace(base, **patch)


def apply_env_overrides(
    record: SettingsRecord, environ: Optional[Mapping[str, str]] = None
) -> SettingsRecord:
    """Return a copy of ``record`` with ``TURBO_API``/``TURBO_LOGIN``/``TURBO_TEAM`` applied."""
    environ = os.environ if environ is None else environ
    patch = {attr: environ[var] for var, attr in ENV_OVERRIDES.items() if environ.get(var)}
    return replace(record, **patch)

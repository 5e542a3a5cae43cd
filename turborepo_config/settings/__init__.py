"""The persisted login/team settings record.

One JSON object per user, stored as ``config.json`` in the ``turborepo``
namespace of the platform's per-user config directory. Reads merge the file
over built-in defaults so the API and login URLs are always usable; writes
omit empty fields.
"""

from .record import DEFAULT_API_URL, DEFAULT_LOGIN_URL, SettingsRecord, apply_env_overrides
from .store import (
    ConfigStore,
    read_record,
    read_user_record,
    reset_user_record,
    write_record,
    write_user_record,
)

__all__ = [
    "ConfigStore",
    "DEFAULT_API_URL",
    "DEFAULT_LOGIN_URL",
    "SettingsRecord",
    "apply_env_overrides",
    "read_record",
    "read_user_record",
    "reset_user_record",
    "write_record",
    "write_user_record",
]

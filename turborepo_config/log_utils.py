"""Logging-related utilities.

Bearer tokens must never reach logs or terminal output in full. Everything
that prints a settings record goes through these helpers.
"""

from __future__ import annotations

from typing import Dict, Mapping

_VISIBLE_TAIL = 4


def redact_token(token: str) -> str:
    """Mask all but the last four characters of ``token``.

    Short tokens are masked completely; an empty token renders as ``-``.
    """

    if not token:
        return "-"
    if len(token) <= _VISIBLE_TAIL * 2:
        return "*" * len(token)
    return "*" * (len(token) - _VISIBLE_TAIL) + token[-_VISIBLE_TAIL:]


def redact_mapping(data: Mapping[str, str], key: str = "token") -> Dict[str, str]:
    """Shallow copy of ``data`` with ``key`` redacted if present."""
    out = dict(data)
    if key in out:
        out[key] = redact_token(out[key])
    return out

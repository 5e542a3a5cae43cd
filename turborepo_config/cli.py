"""Command line interface for the turborepo user settings file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .errors import ConfigError
from .log_utils import redact_mapping
from .settings import ConfigStore, apply_env_overrides

log = logging.getLogger(__name__)


def _cmd_path(store: ConfigStore, args: argparse.Namespace) -> int:
    print(store.path())
    return 0


def _cmd_show(store: ConfigStore, args: argparse.Namespace) -> int:
    record, err = store.read_user_record()
    if err is not None and not isinstance(err.__cause__, FileNotFoundError):
        # unreadable or malformed file: still show what a consumer would use
        print(f"warning: {err}", file=sys.stderr)
    if args.env:
        record = apply_env_overrides(record)

    data = redact_mapping(record.to_dict())
    data["loggedIn"] = record.is_logged_in
    print(json.dumps(data, indent=2))
    return 0


def _cmd_login(store: ConfigStore, args: argparse.Namespace) -> int:
    record, err = store.read_user_record()
    if err is not None:
        log.debug("starting from defaults: %s", err)

    patch = {"token": args.token}
    for attr in ("team_id", "team_slug", "api_url", "login_url"):
        value = getattr(args, attr)
        if value is not None:
            patch[attr] = value
    store.write_user_record(replace(record, **patch))
    print(f"Saved credentials to {store.path()}")
    return 0


def _cmd_logout(store: ConfigStore, args: argparse.Namespace) -> int:
    store.reset_user_record()
    print("Logged out")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="turborepo-config",
        description="Inspect and edit the per-user turborepo login settings.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("path", help="Print the config file location")
    p.set_defaults(func=_cmd_path)

    p = sub.add_parser("show", help="Print the effective settings (token redacted)")
    p.add_argument("--env", action="store_true",
                   help="Apply TURBO_API / TURBO_LOGIN / TURBO_TEAM overrides")
    p.set_defaults(func=_cmd_show)

    p = sub.add_parser("login", help="Store a token and optional team/URL settings")
    p.add_argument("--token", required=True)
    p.add_argument("--team-id", dest="team_id", default=None)
    p.add_argument("--team-slug", dest="team_slug", default=None)
    p.add_argument("--api-url", dest="api_url", default=None)
    p.add_argument("--login-url", dest="login_url", default=None)
    p.set_defaults(func=_cmd_login)

    p = sub.add_parser("logout", help="Clear the stored settings")
    p.set_defaults(func=_cmd_logout)
    return ap


def main(argv: Optional[List[str]] = None, store: Optional[ConfigStore] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    store = store or ConfigStore()
    try:
        return args.func(store, args)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

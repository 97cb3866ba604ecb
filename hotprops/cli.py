"""
Single entry point for hotprops: get, list, keys, groups, watch, version.
"""

import argparse
import logging
import sys
import time
from typing import Any

import structlog

from hotprops import __version__
from hotprops.config.loader import get_settings
from hotprops.config.schemas import CliSettings
from hotprops.exceptions import HotPropsError, SettingsError
from hotprops.registry import Types
from hotprops.store import ConfigStore

TYPE_NAMES = [t.name for t in Types.all()]


def configure_logging(level: str) -> None:
    """Send structlog output to stderr, dropping events below level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def _settings(args: argparse.Namespace) -> CliSettings:
    settings = get_settings(args.settings)
    configure_logging(settings.log_level)
    return settings


def _open_store(args: argparse.Namespace, hot_load: bool = False) -> ConfigStore:
    """Build a store from --source/--interval-ms, falling back to settings."""
    settings = _settings(args)
    source = args.source or settings.source
    if not source:
        raise SettingsError("no source: pass --source, set HOTPROPS_SOURCE, or set source in hotprops.yaml")
    interval_ms = args.interval_ms if args.interval_ms is not None else settings.interval_ms
    return ConfigStore(
        source,
        interval_ms,
        auto_start=hot_load,
        encoding=settings.encoding,
    )


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return str(value)


def cmd_get(args: argparse.Namespace) -> int:
    """Print one typed value; exit 1 when the key is absent or unparsable and no default was given."""
    with _open_store(args) as store:
        value = store.get(args.type, args.key, args.pattern, args.default)
    if value is None:
        return 1
    print(_format(value))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Print a delimited value, one converted piece per line."""
    with _open_store(args) as store:
        values = store.get_list(args.type, args.key, args.delimiter, args.pattern, args.default)
    for value in values:
        print(_format(value))
    return 0


def cmd_keys(args: argparse.Namespace) -> int:
    """Print keys in source order, optionally only those with a given value."""
    with _open_store(args) as store:
        keys = store.keys_by_value(args.value) if args.value is not None else store.keys()
    for key in keys:
        print(key)
    return 0


def cmd_groups(args: argparse.Namespace) -> int:
    """Print group names between prefix and suffix."""
    with _open_store(args) as store:
        names = store.group_names(args.prefix, args.suffix)
    for name in names:
        print(name)
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Open hot loading and print the key's value every --every seconds (Ctrl-C stops)."""
    with _open_store(args, hot_load=True) as store:
        count = 0
        try:
            while args.ticks <= 0 or count < args.ticks:
                print(_format(store.get(args.type, args.key, args.pattern, args.default)), flush=True)
                count += 1
                if args.ticks <= 0 or count < args.ticks:
                    time.sleep(args.every)
        except KeyboardInterrupt:
            pass
    return 0


def cmd_version(_: argparse.Namespace) -> int:
    """Print version."""
    print(__version__)
    return 0


def _add_value_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--type", default="string", choices=TYPE_NAMES, help="Semantic type (default: string)")
    p.add_argument("--pattern", default=None, help="Format pattern for temporal types (e.g. yyyy/MM/dd)")
    p.add_argument("--default", default=None, help="Printed when the key is absent or the value does not parse")


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="hotprops",
        description="hotprops: typed, hot-reloadable properties. get, list, keys, groups, watch, version.",
    )
    parser.add_argument("--settings", default=None, help="Settings YAML (default: HOTPROPS_SETTINGS or ./hotprops.yaml)")
    parser.add_argument("--source", default=None, help="Properties file (default: from settings)")
    parser.add_argument("--interval-ms", type=int, default=None, help="Hot-load interval in ms (default: from settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    # get
    p_get = sub.add_parser("get", help="Print one typed value")
    p_get.add_argument("key")
    _add_value_options(p_get)
    p_get.set_defaults(func=cmd_get)

    # list
    p_list = sub.add_parser("list", help="Split a value on a delimiter regex and print each piece")
    p_list.add_argument("key")
    p_list.add_argument("--delimiter", default=",", help="Delimiter regex (default: ,)")
    _add_value_options(p_list)
    p_list.set_defaults(func=cmd_list)

    # keys
    p_keys = sub.add_parser("keys", help="Print keys in source order")
    p_keys.add_argument("--value", default=None, help="Only keys whose value equals this")
    p_keys.set_defaults(func=cmd_keys)

    # groups
    p_groups = sub.add_parser("groups", help="Print names between PREFIX and SUFFIX of matching keys")
    p_groups.add_argument("prefix")
    p_groups.add_argument("suffix")
    p_groups.set_defaults(func=cmd_groups)

    # watch
    p_watch = sub.add_parser("watch", help="Hot-load the source and print a key periodically")
    p_watch.add_argument("key")
    p_watch.add_argument("--every", type=float, default=1.0, help="Seconds between prints (default: 1)")
    p_watch.add_argument("--ticks", type=int, default=0, help="Stop after N prints (default: run until Ctrl-C)")
    _add_value_options(p_watch)
    p_watch.set_defaults(func=cmd_watch)

    # version
    p_version = sub.add_parser("version", help="Print version")
    p_version.set_defaults(func=cmd_version)

    args = parser.parse_args()
    try:
        return args.func(args)
    except HotPropsError as e:
        print(f"hotprops: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Export: MS Access → SQLite
Usage:
  mdb2sqlite <source.mdb|source.accdb> <target.sqlite> [--driver <odbc driver>] [--verbose]
  mdb2sqlite --config <config.yml> [--verbose]
The target must not exist yet or be an empty database.
"""

import logging
import sys

from mdb2sqlite.config import ExportConfig, read_config
from mdb2sqlite.errors import ConfigError
from mdb2sqlite.exporter import export
from mdb2sqlite.source import DEFAULT_DRIVER


def parse_args(argv) -> tuple:
    """Returns (ExportConfig, verbose); usage errors raise ConfigError"""
    args = list(argv)
    if "--help" in args or "-h" in args:
        print(__doc__)
        sys.exit(0)

    config_file = None
    driver = None
    verbose = False
    positional = []
    i = 0
    while i < len(args):
        if args[i] in ("--config", "-c") and i + 1 < len(args):
            config_file = args[i + 1]
            i += 2
        elif args[i] in ("--driver", "-d") and i + 1 < len(args):
            driver = args[i + 1]
            i += 2
        elif args[i] in ("--verbose", "-v"):
            verbose = True
            i += 1
        elif args[i].startswith("-"):
            raise ConfigError(f"Unknown option '{args[i]}'")
        else:
            positional.append(args[i])
            i += 1

    if config_file:
        if positional:
            raise ConfigError("Give either --config or <source> <target>, not both")
        config = read_config(config_file)
        if driver:
            config.driver = driver
        return config, verbose

    if len(positional) != 2:
        raise ConfigError("Expected <source> and <target> arguments")
    return ExportConfig(positional[0], positional[1], driver or DEFAULT_DRIVER), verbose


def setup_logging(config: ExportConfig, verbose: bool):
    if verbose:
        level = logging.DEBUG
    elif config.log_level:
        level = getattr(logging, str(config.log_level).upper(), logging.WARNING)
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    try:
        config, verbose = parse_args(sys.argv[1:] if argv is None else argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(__doc__, file=sys.stderr)
        return 2

    setup_logging(config, verbose)

    print("=" * 50)
    print("Database Export: MS ACCESS → SQLITE")
    print("=" * 50)
    print(f"Source: {config.source}")
    print(f"Target: {config.target}")

    try:
        export(config.source, config.target, config.driver)
    except Exception as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        logging.getLogger(__name__).debug("Export failed", exc_info=True)
        return 1

    print("\n✓ Export completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())

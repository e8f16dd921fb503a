#!/usr/bin/env python3
"""Entry point: parse arguments and hand over to the TUI."""

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

from interface import tui_app
from interface.cli_parser import build_parser as build_cli_parser
from interface.tui_themes import THEMES

PACKAGE_NAME = "todotui"


def build_parser() -> argparse.ArgumentParser:
    return build_cli_parser(commands=tui_app, themes=THEMES.keys())


def package_version() -> str:
    try:
        return pkg_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        print(f"todotui {package_version()}")
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

"""CLI parser construction for the todotui entry point."""

import argparse
from typing import Any, Iterable


def build_parser(commands: Any, themes: Iterable[str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todotui",
        description="A terminal todo.txt manager with vim-like keybindings.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="TODO_FILE falls back to default_todo_file from the config file.",
    )
    parser.add_argument("todo_file", nargs="?", metavar="TODO_FILE", help="path to todo.txt file")
    parser.add_argument("-c", "--config", metavar="CONFIG", help="path to configuration file")
    parser.add_argument("-t", "--theme", choices=list(themes), help="color theme")
    parser.add_argument("-d", "--debug", action="store_true", help="enable debug level logging")
    parser.add_argument("-v", "--version", action="store_true", help="show version information")
    parser.set_defaults(func=commands.cmd_tui)
    return parser


__all__ = ["build_parser"]

from pathlib import Path
from typing import Protocol
import argparse

from ketch.__version__ import __version__
from ketch.types import Action


class ArgsConfig(Protocol):
    action: Action
    dir: Path
    name: Path
    release: bool
    verbose: bool


def args_parse(argv: list[str]) -> ArgsConfig:
    parser = argparse.ArgumentParser(
        prog="ketch",
        description="Builds C projects described by a ketchfile",
        epilog="",
    )
    parser.add_argument("-d", "--dir", type=Path, default=Path.cwd())
    parser.add_argument("--version", action="version", version=__version__)

    subparser = parser.add_subparsers(dest="action", required=True)

    new = subparser.add_parser("new", help="create a new project")
    new.add_argument("name", type=Path)

    build = subparser.add_parser("build", help="compile and link the project")
    build.add_argument("-r", "--release", action="store_true")
    build.add_argument("-v", "--verbose", action="store_true")

    subparser.add_parser("show", help="print the project configuration")
    subparser.add_parser("clean", help="remove the build directory")

    return parser.parse_args(argv)  # type: ignore

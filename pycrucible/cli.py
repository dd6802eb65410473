"""Command-line interface."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from pycrucible.builder import (
    DEFAULT_OUTPUT_PATH,
    build_launcher,
    check_compatibility,
    clean_build,
)
from pycrucible.generator import BuildError

VERSION = "0.1.0"
ABOUT = (
    "Tool to generate python executable by melding UV and python source code "
    "in crucible of one binary"
)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(prog="pycrucible", description=ABOUT)
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check that a project has a uv.lock file")
    check.add_argument("source_dir", type=Path)

    build = commands.add_parser("build", help="Build a launcher for a project")
    build.add_argument("source_dir", type=Path)
    build.add_argument(
        "-B",
        "--uv-path",
        type=Path,
        default=None,
        help="Set the path to `uv` executable. If not found, it will be downloaded.",
    )
    build.add_argument(
        "--extract-to-temp", default="true", help="Extract to temporary directory"
    )
    build.add_argument(
        "-o",
        "--output-path",
        default=DEFAULT_OUTPUT_PATH,
        help="Set the output path and launcher name",
    )
    build.add_argument(
        "-t",
        "--target",
        default=None,
        help="Sets target architecture for cross-platform compilation",
    )

    commands.add_parser("clean", help="Remove the previous build directory")
    commands.add_parser("quit", help="Quit")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = build_parser().parse_args(argv)

    if args.command == "check":
        check_compatibility(args.source_dir)
    elif args.command == "build":
        print("Building the app....")
        try:
            build_launcher(
                args.source_dir,
                uv_path=args.uv_path,
                output_path=args.output_path,
                target=args.target,
                extract_to_temp=args.extract_to_temp == "true",
            )
        except (BuildError, ValueError, OSError) as exc:
            print(f"Failed to build a launcher!!: {exc}", file=sys.stderr)
            return 1
    elif args.command == "clean":
        clean_build()
    elif args.command == "quit":
        print("Quiting the app...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""
hyptrack.cli - Command-line interface.

Main entry point for the hyptrack CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hyptrack import __version__
from hyptrack.commands import cycles, matrix_cmd, roadmap, tree
from hyptrack.config import load_config


def _non_negative_int(value: str) -> int:
    """argparse type for counts that must be 0 or more."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hyptrack",
        description="Hypothesis graph and roadmap tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hyptrack tree project.json              # Show the hypothesis link forest
  hyptrack tree project.json --root H1    # Subtree under one hypothesis
  hyptrack cycles project.json            # List circular links
  hyptrack roadmap project.json           # Roadmap states and progress
  hyptrack roadmap project.json --policy simple --format json
  hyptrack matrix project.json --top 5    # Impact x uncertainty grid

Input is a JSON export with "hypotheses", "links" and "validations" lists.

Configuration (.hyptrack.toml):
  [roadmap]
  policy = "status-aware"   # or "simple"
  tag = "roadmap"

For detailed command help: hyptrack <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"hyptrack {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors (command output is unchanged)",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tree command
    tree_parser = subparsers.add_parser(
        "tree",
        help="Show hypotheses as a forest of linked trees",
    )
    tree_parser.add_argument("data", type=Path, help="JSON export file")
    tree_parser.add_argument(
        "--root",
        help="Start from this hypothesis instead of every root",
        metavar="ID",
    )
    tree_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output traversal rows as JSON",
    )

    # cycles command
    cycles_parser = subparsers.add_parser(
        "cycles",
        help="Report circular links (exit 1 if any)",
    )
    cycles_parser.add_argument("data", type=Path, help="JSON export file")

    # roadmap command
    roadmap_parser = subparsers.add_parser(
        "roadmap",
        help="Show roadmap step states and progress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Policies:
  status-aware   Completed needs a confirmed/refuted status; validated but
                 inconclusive steps are shown as inProgress (default)
  simple         Any validation completes a step
""",
    )
    roadmap_parser.add_argument("data", type=Path, help="JSON export file")
    roadmap_parser.add_argument(
        "--policy",
        choices=["simple", "status-aware"],
        help="State policy (default: from config)",
    )
    roadmap_parser.add_argument(
        "--tag",
        help="Roadmap membership tag (default: from config)",
    )
    roadmap_parser.add_argument(
        "--format",
        choices=["text", "json", "csv"],
        default="text",
        help="Output format (default: text)",
    )

    # matrix command
    matrix_parser = subparsers.add_parser(
        "matrix",
        help="Show the impact x uncertainty grid",
    )
    matrix_parser.add_argument("data", type=Path, help="JSON export file")
    matrix_parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=0,
        help="Also list the N highest-priority hypotheses",
        metavar="N",
    )

    return parser


def configure_logging(args: argparse.Namespace) -> None:
    """Set up the root logger from config and -v/-q."""
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        name = str(load_config(args.config).get("logging.level", "WARNING")).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        configure_logging(args)

        # Dispatch to command handlers
        if args.command == "tree":
            return tree.run(args)
        elif args.command == "cycles":
            return cycles.run(args)
        elif args.command == "roadmap":
            return roadmap.run(args)
        elif args.command == "matrix":
            return matrix_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

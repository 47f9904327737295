"""
histree.cli - Command-line interface.

Main entry point for the histree CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from histree import __version__
from histree.commands import config_cmd, counter_cmd
from histree.history import DedupPolicy


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="histree",
        description="Branching undo/redo history engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  histree counter inc inc undo dec          # Branch after an undo
  histree counter --start 1 inc undo redo:inc
  histree counter jump:10 undo jump:20 --format markdown
  histree counter inc reset dec             # Rebase history on the live value

Steps:
  inc[:N] dec[:N]   Add/subtract (default 1)
  jump:N            Set the counter to N
  undo              Revert the operation at the cursor
  redo:KIND         Resume the inc/dec/jump branch
  reset             Start a fresh history from the current value

Configuration:
  histree config path                       # Show config file location
  histree config show                       # View all settings
  histree config set history.dedup strict   # keep-stored | replace | strict

For detailed command help: histree <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"histree {__version__}",
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
        help="Debug logging; re-raise errors with tracebacks",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # counter command
    counter_parser = subparsers.add_parser(
        "counter",
        help="Replay steps against the counter demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    counter_parser.add_argument(
        "steps",
        nargs="*",
        metavar="STEP",
        help="inc[:N], dec[:N], jump:N, undo, redo:KIND, reset",
    )
    counter_parser.add_argument(
        "--start",
        type=int,
        default=None,
        help="Initial counter value (default: counter.start from config)",
    )
    counter_parser.add_argument(
        "--dedup",
        choices=[p.value for p in DedupPolicy],
        default=None,
        help="Dedup policy (default: history.dedup from config)",
    )
    counter_parser.add_argument(
        "--format",
        choices=list(counter_cmd.FORMATS),
        default=None,
        help="Dump the final history in this format (default: output.format)",
    )
    counter_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print the final result",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View and modify configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("path", help="Show config file location")
    config_show = config_subparsers.add_parser("show", help="Show merged configuration")
    config_show.add_argument("--json", action="store_true", help="Output as JSON")
    config_get = config_subparsers.add_parser("get", help="Get a configuration value")
    config_get.add_argument("key", help="Dotted key (e.g. history.dedup)")
    config_set = config_subparsers.add_parser("set", help="Set a configuration value")
    config_set.add_argument("key", help="Dotted key (e.g. history.dedup)")
    config_set.add_argument("value", help="Value (true/false, integers and JSON are parsed)")

    # version command
    subparsers.add_parser("version", help="Show version information")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install histree[completion]
    # Then activate: eval "$(register-python-argcomplete histree)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "counter":
            return counter_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "version":
            return version_command(args)
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


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"histree {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

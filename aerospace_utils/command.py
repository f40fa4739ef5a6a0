"""aerospace-utils command line entry point."""

import argparse
import asyncio
import sys
from collections.abc import Sequence

import shtab

from .constants import DEFAULT_ADJUST_AMOUNT, DEFAULT_SHIFT_AMOUNT, MAIN_MONITOR
from .logging_setup import get_logger, init_logger
from .models import AerospaceUtilsError, ExitCode
from .options import GlobalOptions
from .output import Printer
from .version import VERSION
from .workspace import WorkspaceCommands

__all__ = ["get_parser", "main", "run_command"]

TOML_FILE = {
    "bash": "_shtab_aerospace_utils_compgen_TOMLFiles",
    "zsh": "_files -g '(*.toml|*.TOML)'",
    "tcsh": "f:*.toml",
}

PREAMBLE = {
    "bash": """
# $1=COMP_WORDS[1]
_shtab_aerospace_utils_compgen_TOMLFiles() {
  compgen -d -- $1  # recurse into subdirs
  compgen -f -X '!*?.toml' -- $1
  compgen -f -X '!*?.TOML' -- $1
}
""",
    "zsh": "",
    "tcsh": "",
}

WORKSPACE_ALIASES = ["gaps"]


def _add_workspace_commands(subparsers: argparse._SubParsersAction) -> None:
    workspace = subparsers.add_parser(
        "workspace",
        aliases=WORKSPACE_ALIASES,
        help="Manage the workspace size using per-monitor outer gaps",
    )
    actions = workspace.add_subparsers(dest="action", required=True)

    use = actions.add_parser("use", help="Set the workspace size as a percentage of the monitor width")
    use.add_argument("percentage", type=int, nargs="?", help="Percentage (1-100), the saved one if omitted")
    use.add_argument("--set-default", action="store_true", help="Also save the percentage as the default")

    adjust = actions.add_parser("adjust", help="Adjust the current percentage by a relative amount")
    adjust.add_argument(
        "-b",
        "--by",
        type=int,
        default=DEFAULT_ADJUST_AMOUNT,
        help=f"Amount to add, negative to shrink (default: {DEFAULT_ADJUST_AMOUNT})",
    )

    shift = actions.add_parser("shift", help="Shift the workspace left or right")
    shift.add_argument(
        "-b",
        "--by",
        type=int,
        default=DEFAULT_SHIFT_AMOUNT,
        help="Shift in percent of the monitor width, negative moves left, 0 recenters",
    )

    actions.add_parser("current", help="Show the current gaps and saved state")


def get_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="aerospace-utils",
        description="Size the AeroSpace workspace with per-monitor outer gaps",
        allow_abbrev=False,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--config-path",
        help="AeroSpace config file (default: $XDG_CONFIG_HOME/aerospace/aerospace.toml)",
        metavar="filename",
    ).complete = TOML_FILE
    parser.add_argument(
        "--state-path",
        help="State file (default: $XDG_CONFIG_HOME/aerospace/aerospace-utils-state.toml)",
        metavar="filename",
    ).complete = TOML_FILE
    parser.add_argument("--monitor", default=MAIN_MONITOR, help=f"Monitor name (default: {MAIN_MONITOR})")
    parser.add_argument("--monitor-width", type=int, metavar="PIXELS", help="Monitor width, skips display detection")
    parser.add_argument("--no-reload", action="store_true", help="Don't reload AeroSpace after writing the config")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be done without writing anything")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show paths and computed values")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--debug",
        help="Enable debug mode and log to a file",
        metavar="filename",
    ).complete = shtab.FILE
    shtab.add_argument_to(parser, preamble=PREAMBLE)

    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_workspace_commands(subparsers)
    return parser


async def run_command(args: argparse.Namespace, printer: Printer) -> None:
    """Run the workspace action selected by `args`."""
    options = GlobalOptions.from_args(
        config_path=args.config_path,
        state_path=args.state_path,
        monitor=args.monitor,
        monitor_width=args.monitor_width,
        no_reload=args.no_reload,
        dry_run=args.dry_run,
        verbose=args.verbose,
        no_color=args.no_color,
    )
    commands = WorkspaceCommands(options, printer)
    match args.action:
        case "use":
            await commands.run_use(args.percentage, set_default=args.set_default)
        case "adjust":
            await commands.run_adjust(args.by)
        case "shift":
            await commands.run_shift(args.by)
        case "current":
            await commands.run_current()
        case _:
            msg = f"unknown action: {args.action}"
            raise AerospaceUtilsError(msg)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the command."""
    args = get_parser().parse_args(argv)
    if args.debug:
        init_logger(filename=args.debug, force_debug=True)
    else:
        init_logger()
    log = get_logger("startup")
    printer = Printer(no_color=args.no_color)

    try:
        asyncio.run(run_command(args, printer))
    except KeyboardInterrupt:
        pass
    except AerospaceUtilsError as e:
        log.debug("Command failed", exc_info=True)
        printer.error(f"Error: {e}")
        sys.exit(ExitCode.ERROR)
    sys.exit(ExitCode.SUCCESS)

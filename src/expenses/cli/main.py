# ==================================================================================================
#                                   CLI
# ==================================================================================================
#
# Entry point for the `expenses` command-line interface.
#
# This module is a thin dispatcher:
# - resolve settings once (config file + environment)
# - resolve the command name against the registry
# - build the command's flag set, parse, enforce the minimum argument count
# - call the command's runner with the collaborators
#
# Validation logic lives in `expenses.flags`; remote calls in `expenses.api`.
#
# ==================================================================================================
# Imports
# ==================================================================================================

import logging
import os
import sys
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional, Sequence, TextIO

import yaml

from expenses.api.client import ExpensesClient
from expenses.api.credentials import JsonCredentialStore
from expenses.cli.types import CliCommand, CommandContext
from expenses.constants import PROGRAM_NAME
from expenses.errors import ErrorPolicy, UnknownCommandError, run_command
from expenses.flags.flagset import FlagSet
from expenses.logging import configure_logging
from expenses.settings import ClientSettings, resolve_settings

# Command handlers (thin; no validation logic here either)
from expenses.cli.commands import (  # noqa: F401
    create as cmd_create,
    delete as cmd_delete,
    get_all as cmd_get_all,
    get_by_ids as cmd_get_by_ids,
    login as cmd_login,
    logout as cmd_logout,
    signup as cmd_signup,
    update as cmd_update,
)

logger = logging.getLogger(__name__)


# ==================================================================================================
# Command registry
# ==================================================================================================

_COMMANDS: Dict[str, CliCommand] = {
    "create": cmd_create,
    "update": cmd_update,
    "delete": cmd_delete,
    "get-all": cmd_get_all,
    "get-by-ids": cmd_get_by_ids,
    "login": cmd_login,
    "logout": cmd_logout,
    "signup": cmd_signup,
}

_HELP_ARGS = ("help", "-h", "--help")


# ==================================================================================================
# Dispatch
# ==================================================================================================

def resolve_command(name: str) -> CliCommand:
    """
    Look up a registered command module.

    Raises
    ------
    UnknownCommandError
        `name` is not in the registry.
    """
    module = _COMMANDS.get(name)
    if module is None:
        raise UnknownCommandError(f"invalid command '{name}'")

    for attr in ("NAME", "MIN_ARGS", "build_flags", "run"):
        if not hasattr(module, attr):
            raise RuntimeError(f"CLI command module for '{name}' is missing {attr}.")
    return module


def dispatch(
    command: CliCommand,
    args: Sequence[str],
    ctx: CommandContext,
    *,
    program: str = PROGRAM_NAME,
) -> str:
    """
    Run one command: build flags, parse `args`, enforce the count, call the runner.

    Parameters
    ----------
    command
        Resolved command module.
    args
        Arguments after the command name.
    ctx
        Collaborators handed to the runner.
    program
        Program name used in help and usage hints.

    Returns
    -------
    str
        Confirmation text to print.

    Usage example
    -------------
        message = dispatch(resolve_command("delete"), ["--id", expense_id], ctx)
    """
    flag_set = FlagSet(command.NAME, program=program, description=getattr(command, "HELP", None))
    flags = command.build_flags(flag_set)

    flag_set.parse(args)
    flag_set.require(command.MIN_ARGS)

    logger.debug("running %s with %d flag(s)", command.NAME, flag_set.nflag)
    return command.run(flags, ctx)


@contextmanager
def build_context(settings: ClientSettings) -> Iterator[CommandContext]:
    """
    Create the collaborators for one invocation and close them afterwards.

    Usage example
    -------------
        with build_context(settings) as ctx:
            dispatch(command, args, ctx)
    """
    credentials = JsonCredentialStore(settings.credentials_path)
    client = ExpensesClient(settings.api_url, credentials, timeout_s=settings.timeout_s)
    try:
        yield CommandContext(client=client, credentials=credentials)
    finally:
        client.close()


def _execute(argv: Sequence[str], settings: ClientSettings, program: str) -> str:
    # Resolve first: an unknown name must fail before any flag set or client exists.
    command = resolve_command(argv[0])
    with build_context(settings) as ctx:
        return dispatch(command, argv[1:], ctx, program=program)


# ==================================================================================================
# Usage
# ==================================================================================================

def print_usage(program: str = PROGRAM_NAME, stream: Optional[TextIO] = None) -> None:
    """
    Print the list of commands with their `--help` hint.

    Usage example
    -------------
        print_usage("expenses")
    """
    out = sys.stdout if stream is None else stream
    print(f"Usage of {program}:", file=out)
    print("<command> [<args>]", file=out)
    for name, module in _COMMANDS.items():
        print(f"  {name:<12}--help\t{getattr(module, 'HELP', '')}", file=out)


# ==================================================================================================
# Entry point
# ==================================================================================================

def main(argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv
        Optional argv (without the program name) for testing. If None, reads sys.argv.
    env
        Optional environment for testing. If None, reads os.environ.

    Returns
    -------
    int
        Exit code: 0 on success, 1 on any failure.

    Usage example
    -------------
        main(["create", "--title", "Lunch", "--currency", "eur", "--price", "12.50"])
    """
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = resolve_settings(os.environ if env is None else env)
        configure_logging(settings.log_level)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        print(f"could not load settings: {exc}", file=sys.stderr)
        return 1

    if not args or args[0] in _HELP_ARGS:
        print_usage(PROGRAM_NAME)
        return 0 if args else 1

    policy = ErrorPolicy(debug=settings.debug, log_path=settings.log_path)
    try:
        result = run_command(policy, args[0], {"command": args[0]}, _execute, args, settings, PROGRAM_NAME)
    except SystemExit as exc:
        # `<command> --help` prints argparse help and exits through here.
        return exc.code if isinstance(exc.code, int) else 0

    if result.failure is not None:
        print(result.failure.message, file=sys.stderr)
        return 1

    print(result.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Shared CLI typing contracts.

This module defines the protocol the dispatcher uses to type check command
modules, and the context object every command receives at run time.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from expenses.api.client import ExpensesApi
from expenses.api.credentials import CredentialStore
from expenses.flags.flagset import FlagSet

# ==================================================================================================
#                                   TYPES
# ==================================================================================================

@dataclass(frozen=True)
class CommandContext:
    """
    Collaborators available to a running command.

    Attributes
    ----------
    client : ExpensesApi
        Remote bookkeeping operations.
    credentials : CredentialStore
        Store written by login/signup/logout.
    """

    client: ExpensesApi
    credentials: CredentialStore


class CliCommand(Protocol):
    """
    Structural interface for CLI command modules.

    Any module registered in `expenses.cli.main._COMMANDS` should implement this
    protocol:
    - `NAME`, `MIN_ARGS`, `HELP` describe the command.
    - `build_flags(...)` registers the command's switches and returns their values.
    - `run(...)` calls the remote operation after parsing + argument count checks,
      and returns the confirmation text to print.
    """

    NAME: str
    MIN_ARGS: int
    HELP: str

    def build_flags(self, flag_set: FlagSet) -> Any: ...
    def run(self, flags: Any, ctx: CommandContext) -> str: ...

# ==================================================================================================
#                         Core: flag registration and counting (library)
# ==================================================================================================
"""
Per-command flag sets built on argparse.

A `FlagSet` is created for exactly one command invocation. Typed values from
`expenses.flags.values` are bound to one or more switch aliases through a
single argparse action, so every alias converges on the same value object and
the last write wins (identifier lists accumulate instead).

Parsing is strictly left to right: each switch immediately runs its value's
`accept`, and the first failure aborts parsing. argparse's own exits are turned
into `FlagParseError` so callers see one error taxonomy.
"""

import argparse
import logging
import sys
from typing import Any, Iterable, List, Optional, Sequence, Set, TextIO, TypeVar

from expenses.constants import PROGRAM_NAME
from expenses.errors import ArgumentCountError, FlagParseError, ValidationError
from expenses.flags.values import (
    CurrencyValue,
    EmailValue,
    FlagValue,
    IDListValue,
    PageSizeValue,
    PageValue,
    PasswordValue,
    PriceValue,
    TitleValue,
)

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=FlagValue)


# ==================================================================================================
#                                   ARGPARSE GLUE
# ==================================================================================================

class _AcceptAction(argparse.Action):
    """Forward every occurrence of a switch to the bound value's `accept`."""

    def __init__(self, option_strings: Sequence[str], dest: str, flag_value: FlagValue, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, default=argparse.SUPPRESS, **kwargs)
        self.flag_value = flag_value

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: Optional[str] = None,
    ) -> None:
        try:
            self.flag_value.accept(str(values))
        except ValidationError as exc:
            raise ValidationError(exc.message, switch=option_string) from exc

        if isinstance(parser, FlagSet) and option_string is not None:
            parser.mark_supplied(option_string)


# ==================================================================================================
#                                   FLAG SET
# ==================================================================================================

class FlagSet(argparse.ArgumentParser):
    """
    The argument set of one command invocation.

    Parameters
    ----------
    command
        Command name, used in help, usage hints and error messages.
    program
        Program name shown in usage hints.
    description
        Optional help description.

    Usage example
    -------------
        flag_set = FlagSet("create")
        title = flag_set.bind(TitleValue(), "--title", "--t", help="Expense title")
        flag_set.parse(["--t", "Lunch"])
        flag_set.require(1)
    """

    def __init__(self, command: str, *, program: str = PROGRAM_NAME, description: Optional[str] = None) -> None:
        super().__init__(prog=f"{program} {command}", description=description, allow_abbrev=False)
        self.command = command
        self.program = program
        self._supplied: Set[str] = set()

    # argparse calls error() for unknown switches, missing values and stray
    # positionals; raising keeps control in the caller instead of exiting.
    def error(self, message: str) -> None:  # type: ignore[override]
        raise FlagParseError(f"could not parse '{self.command}' flags: {message}")

    def bind(self, value: V, *switches: str, help: Optional[str] = None) -> V:
        """
        Bind `value` to every switch in `switches` and return it.

        Parameters
        ----------
        value
            Typed flag value receiving the raw text.
        switches
            One or more switch spellings, e.g. "--title", "--t".
        help
            Help text shown by `--help`.

        Returns
        -------
        FlagValue
            The same `value`, for convenient assignment.
        """
        if not switches:
            raise ValueError("bind() needs at least one switch")

        self.add_argument(
            *switches,
            dest=switches[0].lstrip("-"),
            action=_AcceptAction,
            flag_value=value,
            metavar="VALUE",
            help=help,
        )
        return value

    def mark_supplied(self, switch: str) -> None:
        """Record that `switch` was accepted during the current parse."""
        self._supplied.add(switch)

    @property
    def supplied(self) -> Set[str]:
        """Distinct switch spellings accepted so far."""
        return set(self._supplied)

    @property
    def nflag(self) -> int:
        """Number of distinct switches accepted so far."""
        return len(self._supplied)

    def parse(self, args: Iterable[str]) -> None:
        """
        Consume `args` left to right, feeding each switch to its value.

        Raises
        ------
        ValidationError
            A value rejected its raw text; the message names the command and switch.
        FlagParseError
            The argument vector is malformed.
        """
        try:
            self.parse_args(self._attach_values(args))
        except ValidationError as exc:
            raise exc.wrap(f"could not parse '{self.command}' flags") from exc
        logger.debug("parsed %s flags: %s", self.command, sorted(self._supplied))

    def _attach_values(self, args: Iterable[str]) -> List[str]:
        # A bound switch always takes the next argument as its value, even one starting
        # with "-": "--switch value" is rewritten to "--switch=value".
        attached: List[str] = []
        pending = False
        for arg in args:
            if pending:
                attached[-1] = f"{attached[-1]}={arg}"
                pending = False
                continue
            attached.append(arg)
            pending = isinstance(self._option_string_actions.get(arg), _AcceptAction)
        return attached

    def require(self, minimum: int, *, stream: Optional[TextIO] = None) -> None:
        """
        Enforce the command's minimum number of supplied flags.

        Writes a usage hint to `stream` (stderr by default) before raising.

        Raises
        ------
        ArgumentCountError
            Fewer than `minimum` flags were supplied.
        """
        provided = self.nflag
        if provided >= minimum:
            return

        out = sys.stderr if stream is None else stream
        print(f"incorrect use of {self.command}", file=out)
        print(f"{self.program} {self.command} --help", file=out)
        raise ArgumentCountError(self.command, minimum=minimum, provided=provided)


# ==================================================================================================
#                                   REGISTRATION HELPERS
# ==================================================================================================

def add_title_flag(flag_set: FlagSet, *, optional: bool = False) -> TitleValue:
    """Register `--title/--t` on `flag_set`."""
    return flag_set.bind(TitleValue(optional=optional), "--title", "--t", help="Expense title")


def add_currency_flag(flag_set: FlagSet, *, optional: bool = False) -> CurrencyValue:
    """Register `--currency/--c` on `flag_set`."""
    return flag_set.bind(CurrencyValue(optional=optional), "--currency", "--c", help="Expense currency")


def add_price_flag(flag_set: FlagSet, *, optional: bool = False) -> PriceValue:
    """Register `--price/--p` on `flag_set`."""
    return flag_set.bind(PriceValue(optional=optional), "--price", "--p", help="Expense price")


def add_ids_flag(flag_set: FlagSet) -> IDListValue:
    """Register `--id/--i` on `flag_set`; repeat the switch to pass several ids."""
    return flag_set.bind(
        IDListValue(),
        "--id",
        "--i",
        help="Expense id to be appended to the list of ids (repeatable)",
    )


def add_page_flag(flag_set: FlagSet) -> PageValue:
    """Register `--page/--p` on `flag_set`."""
    return flag_set.bind(PageValue(), "--page", "--p", help="Page number (for pagination)")


def add_page_size_flag(flag_set: FlagSet) -> PageSizeValue:
    """Register `--page_size/--ps` on `flag_set`."""
    return flag_set.bind(PageSizeValue(), "--page_size", "--ps", help="Page size (for pagination)")


def add_email_flag(flag_set: FlagSet) -> EmailValue:
    """Register `--email/--e` on `flag_set`."""
    return flag_set.bind(EmailValue(), "--email", "--e", help="The user email for login/signup")


def add_password_flag(flag_set: FlagSet) -> PasswordValue:
    """Register `--password/--p` on `flag_set`."""
    return flag_set.bind(PasswordValue(), "--password", "--p", help="The user password for login/signup")

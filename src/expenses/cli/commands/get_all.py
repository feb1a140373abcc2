# ==================================================================================================
#                                CLI: get-all
# ==================================================================================================
#
# Command handler for: `expenses get-all [--page N] [--page_size N]`
#
# Both switches are optional; omitted or empty values fall back to page 1, size 5.
#

from dataclasses import dataclass

from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError
from expenses.flags.flagset import FlagSet, add_page_flag, add_page_size_flag
from expenses.flags.values import PageSizeValue, PageValue

NAME: str = "get-all"
MIN_ARGS: int = 0
HELP: str = "List expenses page by page"


@dataclass(frozen=True, slots=True)
class GetAllFlags:
    """Values bound to the `get-all` switches."""

    page: PageValue
    page_size: PageSizeValue


def build_flags(flag_set: FlagSet) -> GetAllFlags:
    """Register the `get-all` pagination switches."""
    return GetAllFlags(page=add_page_flag(flag_set), page_size=add_page_size_flag(flag_set))


def run(flags: GetAllFlags, ctx: CommandContext) -> str:
    """Fetch one page of expenses and return it for printing."""
    try:
        body = ctx.client.list(flags.page.value, flags.page_size.value)
    except (CollaboratorError, CredentialError) as exc:
        raise exc.wrap("could not fetch expenses") from exc

    return f"expenses fetched successfully:\n{body}"

# ==================================================================================================
#                                CLI: get-by-ids
# ==================================================================================================
#
# Command handler for: `expenses get-by-ids --id ID [--id ID ...]`
#
# Repeated ids are collapsed by the flag value, so each expense is requested once.
#

from dataclasses import dataclass

from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError, ValidationError
from expenses.flags.flagset import FlagSet, add_ids_flag
from expenses.flags.values import IDListValue

NAME: str = "get-by-ids"
MIN_ARGS: int = 1
HELP: str = "Fetch expenses by one or more ids"


@dataclass(frozen=True, slots=True)
class GetByIDsFlags:
    """Values bound to the `get-by-ids` switches."""

    ids: IDListValue


def build_flags(flag_set: FlagSet) -> GetByIDsFlags:
    """Register the repeatable `--id` switch."""
    return GetByIDsFlags(ids=add_ids_flag(flag_set))


def run(flags: GetByIDsFlags, ctx: CommandContext) -> str:
    """Fetch the requested expenses and return them for printing."""
    if not flags.ids.values:
        raise ValidationError("at least one expense id must be provided")

    try:
        body = ctx.client.fetch(*flags.ids.values)
    except (CollaboratorError, CredentialError) as exc:
        raise exc.wrap("could not fetch expenses") from exc

    return f"expenses fetched successfully:\n{body}"

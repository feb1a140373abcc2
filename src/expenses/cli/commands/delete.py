# ==================================================================================================
#                                CLI: delete
# ==================================================================================================
#
# Command handler for: `expenses delete --id ID`
#
# Only the first id is deleted; the service endpoint takes a single expense.
#

from dataclasses import dataclass

from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError, ValidationError
from expenses.flags.flagset import FlagSet, add_ids_flag
from expenses.flags.values import IDListValue

NAME: str = "delete"
MIN_ARGS: int = 1
HELP: str = "Delete an expense by id"


@dataclass(frozen=True, slots=True)
class DeleteFlags:
    """Values bound to the `delete` switches."""

    ids: IDListValue


def build_flags(flag_set: FlagSet) -> DeleteFlags:
    """Register the `delete` switches."""
    return DeleteFlags(ids=add_ids_flag(flag_set))


def run(flags: DeleteFlags, ctx: CommandContext) -> str:
    """Execute the `delete` command and return the confirmation text."""
    if not flags.ids.values:
        raise ValidationError("id of the expense must be provided")

    expense_id = flags.ids.values[0]
    try:
        ctx.client.delete(expense_id)
    except (CollaboratorError, CredentialError) as exc:
        raise exc.wrap("could not delete expense") from exc

    return f"expense with id: {expense_id} deleted successfully"

# ==================================================================================================
#                                CLI: create
# ==================================================================================================
#
# Command handler for: `expenses create --title T --currency C --price P`
#
# Responsibilities
# ----------------
# - declare the command's switches (build_flags)
# - call the remote create operation with the validated values (run)
#

# ==================================================================================================
# Imports
# ==================================================================================================
from dataclasses import dataclass

from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError
from expenses.flags.flagset import FlagSet, add_currency_flag, add_price_flag, add_title_flag
from expenses.flags.values import CurrencyValue, PriceValue, TitleValue

# ==================================================================================================
# Constants
# ==================================================================================================

NAME: str = "create"
MIN_ARGS: int = 3
HELP: str = "Create a new expense"


# ==================================================================================================
# Flags
# ==================================================================================================

@dataclass(frozen=True, slots=True)
class CreateFlags:
    """Values bound to the `create` switches."""

    title: TitleValue
    currency: CurrencyValue
    price: PriceValue


def build_flags(flag_set: FlagSet) -> CreateFlags:
    """
    Register the `create` switches; all three are required.

    Usage example
    -------------
        # called internally by expenses.cli.main.dispatch()
        flags = build_flags(FlagSet(NAME))
    """
    return CreateFlags(
        title=add_title_flag(flag_set),
        currency=add_currency_flag(flag_set),
        price=add_price_flag(flag_set),
    )


# ==================================================================================================
# Runner
# ==================================================================================================

def run(flags: CreateFlags, ctx: CommandContext) -> str:
    """
    Execute the `create` command.

    Parameters
    ----------
    flags
        Parsed and validated switch values.
    ctx
        Command collaborators.

    Returns
    -------
    str
        Confirmation text.
    """
    try:
        ctx.client.create(flags.title.value, flags.currency.value, flags.price.value)
    except (CollaboratorError, CredentialError) as exc:
        raise exc.wrap("could not create expense") from exc

    return "expense created successfully"

# ==================================================================================================
#                                CLI: update
# ==================================================================================================
#
# Command handler for: `expenses update --id ID [--title T] [--currency C] [--price P]`
#
# The id plus at least one field must be supplied. Title, currency and price are
# optional: empty input (and "0" for price) leaves the field out of the update.
#

from dataclasses import dataclass

from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError, ValidationError
from expenses.flags.flagset import FlagSet, add_currency_flag, add_ids_flag, add_price_flag, add_title_flag
from expenses.flags.values import CurrencyValue, IDListValue, PriceValue, TitleValue

NAME: str = "update"
MIN_ARGS: int = 2
HELP: str = "Update an existing expense"


@dataclass(frozen=True, slots=True)
class UpdateFlags:
    """Values bound to the `update` switches."""

    title: TitleValue
    currency: CurrencyValue
    price: PriceValue
    ids: IDListValue


def build_flags(flag_set: FlagSet) -> UpdateFlags:
    """Register the `update` switches (fields optional, id required)."""
    return UpdateFlags(
        title=add_title_flag(flag_set, optional=True),
        currency=add_currency_flag(flag_set, optional=True),
        price=add_price_flag(flag_set, optional=True),
        ids=add_ids_flag(flag_set),
    )


def run(flags: UpdateFlags, ctx: CommandContext) -> str:
    """
    Execute the `update` command against the first supplied id.

    Returns
    -------
    str
        Confirmation text.
    """
    if not flags.ids.values:
        raise ValidationError("id of the expense must be provided")

    try:
        ctx.client.update(flags.ids.values[0], flags.title.value, flags.currency.value, flags.price.value)
    except (CollaboratorError, CredentialError) as exc:
        raise exc.wrap("could not update expense") from exc

    return "expense updated successfully"

# ==================================================================================================
#                                CLI: signup
# ==================================================================================================
#
# Command handler for: `expenses signup --email E --password P`
#
# Same switches as `login`; the new account's access token is stored on success.
#

from expenses.api.credentials import CredentialRecord
from expenses.cli.commands.login import CredentialsFlags
from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError
from expenses.flags.flagset import FlagSet, add_email_flag, add_password_flag

NAME: str = "signup"
MIN_ARGS: int = 2
HELP: str = "Create an account and store the access token"


def build_flags(flag_set: FlagSet) -> CredentialsFlags:
    """Register the `signup` switches."""
    return CredentialsFlags(email=add_email_flag(flag_set), password=add_password_flag(flag_set))


def run(flags: CredentialsFlags, ctx: CommandContext) -> str:
    """Register the user, persist the token and return the confirmation text."""
    try:
        token = ctx.client.register(flags.email.value, flags.password.value)
    except CollaboratorError as exc:
        raise exc.wrap("could not sign up the user") from exc

    try:
        ctx.credentials.save(CredentialRecord(access_token=token))
    except CredentialError as exc:
        raise exc.wrap("could not save credentials to file") from exc

    return "successfully signed up the user"

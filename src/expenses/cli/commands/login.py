# ==================================================================================================
#                                CLI: login
# ==================================================================================================
#
# Command handler for: `expenses login --email E --password P`
#
# On success the returned access token replaces the stored credential record.
# Nothing is written when the service rejects the login.
#

from dataclasses import dataclass

from expenses.api.credentials import CredentialRecord
from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError
from expenses.flags.flagset import FlagSet, add_email_flag, add_password_flag
from expenses.flags.values import EmailValue, PasswordValue

NAME: str = "login"
MIN_ARGS: int = 2
HELP: str = "Log in and store the access token"


@dataclass(frozen=True, slots=True)
class CredentialsFlags:
    """Values bound to the `--email`/`--password` switches (shared with signup)."""

    email: EmailValue
    password: PasswordValue


def build_flags(flag_set: FlagSet) -> CredentialsFlags:
    """Register the `login` switches."""
    return CredentialsFlags(email=add_email_flag(flag_set), password=add_password_flag(flag_set))


def run(flags: CredentialsFlags, ctx: CommandContext) -> str:
    """Authenticate, persist the token and return the confirmation text."""
    try:
        token = ctx.client.authenticate(flags.email.value, flags.password.value)
    except CollaboratorError as exc:
        raise exc.wrap("could not login user") from exc

    try:
        ctx.credentials.save(CredentialRecord(access_token=token))
    except CredentialError as exc:
        raise exc.wrap("could not save credentials to file") from exc

    return "successfully logged in"

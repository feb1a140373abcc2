# ==================================================================================================
#                                CLI: logout
# ==================================================================================================
#
# Command handler for: `expenses logout`
#
# Takes no switches. The stored token is cleared only after the service accepted the logout.
#

from typing import Any

from expenses.api.credentials import CredentialRecord
from expenses.cli.types import CommandContext
from expenses.errors import CollaboratorError, CredentialError
from expenses.flags.flagset import FlagSet

NAME: str = "logout"
MIN_ARGS: int = 0
HELP: str = "Log out and clear the stored access token"


def build_flags(flag_set: FlagSet) -> Any:
    """`logout` registers no switches."""
    return None


def run(flags: Any, ctx: CommandContext) -> str:
    """Log out remotely, clear the stored token and return the confirmation text."""
    try:
        ctx.client.deauthenticate()
    except (CollaboratorError, CredentialError) as exc:
        raise exc.wrap("could not log out the user") from exc

    try:
        ctx.credentials.save(CredentialRecord())
    except CredentialError as exc:
        raise exc.wrap("could not clear credentials from file") from exc

    return "successfully logged out the user"

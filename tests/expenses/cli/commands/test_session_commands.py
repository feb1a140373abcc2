"""Wiring tests for the session commands: login, signup, logout."""

from pathlib import Path

import httpx
import pytest

from expenses.api.client import ExpensesClient
from expenses.api.credentials import CredentialRecord, JsonCredentialStore
from expenses.cli.types import CommandContext
from expenses.cli.commands import login, logout, signup
from expenses.cli.main import dispatch
from expenses.errors import ArgumentCountError, CollaboratorError, CredentialError, FlagParseError, ValidationError

EMAIL = "jane@example.com"
PASSWORD = "Secr3t!pw"


def test_login_saves_returned_token(ctx, fake_api, memory_store) -> None:  # noqa: ANN001
    """A successful login persists the service's token."""
    message = dispatch(login, ["--e", EMAIL, "--p", PASSWORD], ctx)

    assert message == "successfully logged in"
    assert fake_api.calls == [("authenticate", (EMAIL, PASSWORD))]
    assert memory_store.saves == [CredentialRecord(access_token="token-123")]


def test_login_failure_writes_no_credentials(ctx, fake_api, memory_store) -> None:  # noqa: ANN001
    """No credential write happens after a rejected login."""
    fake_api.fail = "expected response code: 200, got: 401"

    with pytest.raises(CollaboratorError, match="^could not login user: expected response code"):
        dispatch(login, ["--email", EMAIL, "--password", PASSWORD], ctx)

    assert memory_store.saves == []


def test_login_requires_both_flags(ctx, fake_api) -> None:  # noqa: ANN001
    """Email alone is not enough."""
    with pytest.raises(ArgumentCountError, match="login expects at least: 2 arg\\(s\\), 1 provided"):
        dispatch(login, ["--email", EMAIL], ctx)

    assert fake_api.calls == []


def test_login_rejects_weak_password(ctx, fake_api) -> None:  # noqa: ANN001
    """Password composition is checked while parsing."""
    with pytest.raises(ValidationError, match="at least 1 uppercase letter"):
        dispatch(login, ["--email", EMAIL, "--password", "abc12345"], ctx)

    assert fake_api.calls == []


def test_login_reports_credential_write_failure(ctx, memory_store) -> None:  # noqa: ANN001
    """Store failures are wrapped with the save context."""

    def _broken_save(record: CredentialRecord) -> None:
        raise CredentialError("could not write credentials file: read-only")

    memory_store.save = _broken_save

    with pytest.raises(CredentialError, match="^could not save credentials to file: "):
        dispatch(login, ["--e", EMAIL, "--p", PASSWORD], ctx)


def test_signup_saves_token(ctx, fake_api, memory_store) -> None:  # noqa: ANN001
    """Signup registers the user and stores the token."""
    message = dispatch(signup, ["--email", EMAIL, "--password", PASSWORD], ctx)

    assert message == "successfully signed up the user"
    assert fake_api.calls == [("register", (EMAIL, PASSWORD))]
    assert memory_store.record == CredentialRecord(access_token="token-123")


def test_signup_rejects_bad_email(ctx, fake_api) -> None:  # noqa: ANN001
    """Malformed emails never reach the service."""
    with pytest.raises(ValidationError, match="invalid email address format"):
        dispatch(signup, ["--email", "not-an-email", "--password", PASSWORD], ctx)

    assert fake_api.calls == []


def test_logout_clears_token(ctx, fake_api, memory_store) -> None:  # noqa: ANN001
    """Logout calls the service, then saves an empty record."""
    message = dispatch(logout, [], ctx)

    assert message == "successfully logged out the user"
    assert fake_api.calls == [("deauthenticate", ())]
    assert memory_store.saves == [CredentialRecord()]


def test_logout_failure_keeps_token(ctx, fake_api, memory_store) -> None:  # noqa: ANN001
    """A failed remote logout leaves the stored token alone."""
    fake_api.fail = "could not make http call: refused"

    with pytest.raises(CollaboratorError, match="^could not log out the user: "):
        dispatch(logout, [], ctx)

    assert memory_store.saves == []


def test_logout_takes_no_flags(ctx) -> None:  # noqa: ANN001
    """Any switch on logout is a parse error."""
    with pytest.raises(FlagParseError, match="could not parse 'logout' flags"):
        dispatch(logout, ["--email", EMAIL], ctx)


def test_login_accepts_password_starting_with_symbol(ctx, fake_api) -> None:  # noqa: ANN001
    """A leading "-" is a valid special character, not a switch."""
    dispatch(login, ["--email", EMAIL, "--password", "-Secret1x"], ctx)

    assert fake_api.calls == [("authenticate", (EMAIL, "-Secret1x"))]


def test_logout_recovers_from_corrupt_credentials_file(tmp_path: Path) -> None:
    """An undecodable credentials file is logged out anonymously and then cleared."""
    path = tmp_path / "creds.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonCredentialStore(path)
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    client = ExpensesClient("http://api.test", store, transport=httpx.MockTransport(_handler))
    with client:
        message = dispatch(logout, [], CommandContext(client=client, credentials=store))

    assert message == "successfully logged out the user"
    assert "Authorization" not in seen[0].headers
    assert store.load() == CredentialRecord()

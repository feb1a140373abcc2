"""Shared pytest fixtures and lightweight test doubles for the expenses test suite.

These fixtures replace the HTTP client and the credential file with tiny
in-memory stand-ins so command tests stay fast, deterministic, and offline.
"""

from dataclasses import dataclass, field
from pathlib import Path
import sys
from typing import Any, Optional

import pytest

# Ensure `import expenses` resolves to the in-repo source tree during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from expenses.api.credentials import CredentialRecord  # noqa: E402
from expenses.cli.types import CommandContext  # noqa: E402
from expenses.errors import CollaboratorError  # noqa: E402


@dataclass
class FakeApi:
    """Recording stand-in for `ExpensesApi`; set `fail` to make every call raise."""

    token: str = "token-123"
    body: str = '[\n\t{\n\t\t"title": "Lunch"\n\t}\n]'
    fail: Optional[str] = None
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail is not None:
            raise CollaboratorError(self.fail)

    def create(self, title: str, currency: str, price: float) -> None:
        self._record("create", title, currency, price)

    def update(self, expense_id: str, title: str, currency: str, price: float) -> None:
        self._record("update", expense_id, title, currency, price)

    def delete(self, expense_id: str) -> None:
        self._record("delete", expense_id)

    def list(self, page: str, page_size: str) -> str:
        self._record("list", page, page_size)
        return self.body

    def fetch(self, *ids: str) -> str:
        self._record("fetch", *ids)
        return self.body

    def authenticate(self, email: str, password: str) -> str:
        self._record("authenticate", email, password)
        return self.token

    def register(self, email: str, password: str) -> str:
        self._record("register", email, password)
        return self.token

    def deauthenticate(self) -> None:
        self._record("deauthenticate")


@dataclass
class MemoryCredentialStore:
    """In-memory `CredentialStore` that remembers every save."""

    record: Optional[CredentialRecord] = None
    saves: list[CredentialRecord] = field(default_factory=list)

    def load(self) -> Optional[CredentialRecord]:
        return self.record

    def save(self, record: CredentialRecord) -> None:
        self.saves.append(record)
        self.record = record


@pytest.fixture
def fake_api() -> FakeApi:
    """Reusable recording API double."""
    return FakeApi()


@pytest.fixture
def memory_store() -> MemoryCredentialStore:
    """Credential store that starts signed in."""
    return MemoryCredentialStore(record=CredentialRecord(access_token="stored-token"))


@pytest.fixture
def ctx(fake_api: FakeApi, memory_store: MemoryCredentialStore) -> CommandContext:
    """Command context wired to the in-memory doubles."""
    return CommandContext(client=fake_api, credentials=memory_store)


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    """Small config payload touching every settings section."""
    return {
        "api": {"url": "http://expenses.test/", "timeout_s": 3},
        "credentials": {"path": "state/creds.json"},
        "logging": {"level": "debug", "file": "logs/failures.log"},
        "debug": True,
    }

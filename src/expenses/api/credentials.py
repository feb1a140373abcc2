# ==================================================================================================
#                               Credential store
# ==================================================================================================
#
# Persists the single bearer token the client holds between invocations.
# Writers: login/signup (new token) and logout (empty token).
# Reader: the HTTP client, before every authenticated call.
#
# The store is injected wherever it is needed; nothing reaches for the file implicitly.

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from expenses.errors import CredentialError

logger = logging.getLogger(__name__)


# ==================================================================================================
#                                   TYPES
# ==================================================================================================

@dataclass(frozen=True, slots=True)
class CredentialRecord:
    """
    Bearer token of the current session. An empty token means "signed out".

    Usage example
    -------------
        record = CredentialRecord(access_token="abc")
        assert record.is_authenticated
    """

    access_token: str = ""

    @property
    def is_authenticated(self) -> bool:
        return self.access_token != ""


class CredentialStore(Protocol):
    """Load/save interface consumed by the client and the auth commands."""

    def load(self) -> Optional[CredentialRecord]: ...
    def save(self, record: CredentialRecord) -> None: ...


# ==================================================================================================
#                                   JSON FILE STORE
# ==================================================================================================

class JsonCredentialStore:
    """
    Credential record kept as `{"access_token": "..."}` in a UTF-8 JSON file.

    Parameters
    ----------
    path
        File location; parent directories are created on save.

    Usage example
    -------------
        store = JsonCredentialStore(Path(".credentials.json"))
        store.save(CredentialRecord("token"))
        assert store.load() == CredentialRecord("token")
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[CredentialRecord]:
        """
        Read the record, or return None when no file exists yet.

        An empty file is read as a signed-out record.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CredentialError(f"could not open credentials file: {exc}") from exc

        if text.strip() == "":
            return CredentialRecord()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CredentialError(f"could not decode json credentials: {exc}") from exc

        if not isinstance(data, dict):
            raise CredentialError("could not decode json credentials: expected an object")

        return CredentialRecord(access_token=str(data.get("access_token") or ""))

    def save(self, record: CredentialRecord) -> None:
        """Overwrite the file with `record`."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"access_token": record.access_token}) + "\n", encoding="utf-8")
        except OSError as exc:
            raise CredentialError(f"could not write credentials file: {exc}") from exc
        logger.debug("credentials written to %s", self.path)

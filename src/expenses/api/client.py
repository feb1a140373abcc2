"""
HTTP client for the bookkeeping service.

`ExpensesApi` is the narrow interface the commands call; `ExpensesClient` is
the shipped implementation, speaking JSON over HTTP with httpx. Every call is
synchronous: one request, wait for the response, compare the status code with
the one the endpoint promises.

Authenticated endpoints read the bearer token from the injected credential
store right before the request is built.
"""

import json
import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from expenses.api.credentials import CredentialStore
from expenses.constants import DEFAULT_TIMEOUT_S
from expenses.errors import CollaboratorError, CredentialError

logger = logging.getLogger(__name__)


# ==================================================================================================
#                                   INTERFACE
# ==================================================================================================

class ExpensesApi(Protocol):
    """
    Remote operations the commands dispatch to.

    Read operations return the response body as (pretty-printed) text; the
    commands print it without interpreting it.
    """

    def create(self, title: str, currency: str, price: float) -> None: ...
    def update(self, expense_id: str, title: str, currency: str, price: float) -> None: ...
    def delete(self, expense_id: str) -> None: ...
    def list(self, page: str, page_size: str) -> str: ...
    def fetch(self, *ids: str) -> str: ...
    def authenticate(self, email: str, password: str) -> str: ...
    def register(self, email: str, password: str) -> str: ...
    def deauthenticate(self) -> None: ...


# ==================================================================================================
#                                   HTTP IMPLEMENTATION
# ==================================================================================================

class ExpensesClient:
    """
    httpx-backed `ExpensesApi`.

    Parameters
    ----------
    base_url
        Service root, e.g. "http://localhost:8080".
    credentials
        Store the bearer token is read from.
    timeout_s
        Transport timeout per request.
    transport
        Optional httpx transport (tests pass `httpx.MockTransport`).

    Usage example
    -------------
        with ExpensesClient("http://localhost:8080", JsonCredentialStore(path)) as client:
            print(client.list("1", "5"))
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.credentials = credentials
        self._http = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def __enter__(self) -> "ExpensesClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._http.close()

    # ----------------------------------------------------------------------------------------------
    # Expenses
    # ----------------------------------------------------------------------------------------------

    def create(self, title: str, currency: str, price: float) -> None:
        body = {"title": title, "currency": currency, "price": price}
        self._call("POST", "/expenses", httpx.codes.CREATED, json_body=body, auth=True)

    def update(self, expense_id: str, title: str, currency: str, price: float) -> None:
        # PATCH carries only what the user supplied; unset optional flags keep their zero values.
        body: Dict[str, Any] = {}
        if title:
            body["title"] = title
        if currency:
            body["currency"] = currency
        if price > 0:
            body["price"] = price
        self._call("PATCH", f"/expenses/{expense_id}", httpx.codes.NO_CONTENT, json_body=body, auth=True)

    def delete(self, expense_id: str) -> None:
        self._call("DELETE", f"/expenses/{expense_id}", httpx.codes.NO_CONTENT, auth=True)

    def list(self, page: str, page_size: str) -> str:
        params = {"page": page, "page_size": page_size}
        return self._call("GET", "/expenses", httpx.codes.OK, params=params, auth=True)

    def fetch(self, *ids: str) -> str:
        return self._call("GET", "/expenses/" + ",".join(ids), httpx.codes.OK, auth=True)

    # ----------------------------------------------------------------------------------------------
    # Session
    # ----------------------------------------------------------------------------------------------

    def authenticate(self, email: str, password: str) -> str:
        body = self._call("POST", "/login", httpx.codes.OK, json_body={"email": email, "password": password})
        return _access_token(body)

    def register(self, email: str, password: str) -> str:
        body = self._call("POST", "/signup", httpx.codes.OK, json_body={"email": email, "password": password})
        return _access_token(body)

    def deauthenticate(self) -> None:
        self._call("POST", "/logout", httpx.codes.OK, auth=self._has_token())

    # ----------------------------------------------------------------------------------------------
    # Plumbing
    # ----------------------------------------------------------------------------------------------

    def _has_token(self) -> bool:
        try:
            record = self.credentials.load()
        except CredentialError as exc:
            # Only logout asks; an unreadable file must not block clearing it.
            logger.warning("ignoring unreadable credentials: %s", exc)
            return False
        return record is not None and record.is_authenticated

    def _auth_headers(self) -> Dict[str, str]:
        record = self.credentials.load()
        if record is None or not record.is_authenticated:
            raise CredentialError("not logged in: run 'login' or 'signup' first")
        return {"Authorization": f"Bearer {record.access_token}"}

    def _call(
        self,
        method: str,
        path: str,
        expected_status: int,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        auth: bool = False,
    ) -> str:
        headers = self._auth_headers() if auth else {}

        logger.debug("%s %s (expecting %d)", method, path, int(expected_status))
        try:
            response = self._http.request(method, path, json=json_body, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise CollaboratorError(f"could not make http call: {exc}") from exc

        if response.status_code != expected_status:
            if response.content:
                logger.warning("got this response body:\n%s", response.text)
            raise CollaboratorError(
                f"expected response code: {int(expected_status)}, got: {response.status_code}"
            )

        return _indent_json(response.text)


# ==================================================================================================
#                                   HELPERS
# ==================================================================================================

def _indent_json(text: str) -> str:
    if text.strip() == "":
        return ""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CollaboratorError(f"could not indent json: {exc}") from exc
    return json.dumps(payload, indent="\t", ensure_ascii=False)


def _access_token(body: str) -> str:
    try:
        payload = json.loads(body) if body else {}
    except json.JSONDecodeError as exc:  # pragma: no cover (already validated by _indent_json)
        raise CollaboratorError(f"could not decode response: {exc}") from exc

    token = payload.get("access_token") if isinstance(payload, dict) else None
    if not isinstance(token, str) or token == "":
        raise CollaboratorError("response did not include an access token")
    return token


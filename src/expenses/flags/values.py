# ==================================================================================================
#                         Core: typed flag values (library)
# ==================================================================================================
"""
One validator + normalizer per domain field carried on the command line.

Every value implements the same two-operation contract (`FlagValue`):
- `render()` returns the current value as text (used by help and debugging).
- `accept(raw)` validates and normalizes raw text, storing it on success and
  raising `ValidationError` otherwise.

A rejected input never touches the stored value: a value is either unset
(its default) or valid. This module contains no argparse code; binding values
to switches lives in `expenses.flags.flagset`.
"""

import math
import re
import unicodedata
import uuid
from dataclasses import dataclass, field
from typing import List, Protocol, Set

from expenses.constants import (
    CURRENCIES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    EMAIL_MAX_LENGTH,
    EMAIL_MIN_LENGTH,
    MAX_PAGE_SIZE,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
)
from expenses.errors import ValidationError

# ==================================================================================================
#                                   CONSTANTS
# ==================================================================================================

# RFC 5322-ish shape check: local part of atext characters, dot-separated DNS labels.
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
# Plain decimal or exponent notation; no whitespace, underscores, "inf" or "nan".
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


# ==================================================================================================
#                                   TYPES
# ==================================================================================================

class FlagValue(Protocol):
    """
    Structural interface shared by every typed flag value.

    `expenses.flags.flagset.FlagSet.bind` accepts any object implementing it.
    """

    def render(self) -> str: ...
    def accept(self, raw: str) -> None: ...


@dataclass
class TitleValue:
    """
    Expense title: trimmed, non-empty unless the flag is optional.

    Usage example
    -------------
        title = TitleValue()
        title.accept("  Lunch ")
        assert title.value == "Lunch"
    """

    optional: bool = False
    value: str = ""

    def render(self) -> str:
        return self.value

    def accept(self, raw: str) -> None:
        title = raw.strip()
        if title == "":
            if self.optional:
                return
            raise ValidationError("expense title flag is required and must not be empty")
        self.value = title


@dataclass
class CurrencyValue:
    """
    Expense currency: trimmed, upper-cased, one of `CURRENCIES`.

    Usage example
    -------------
        currency = CurrencyValue()
        currency.accept("eur")
        assert currency.value == "EUR"
    """

    optional: bool = False
    value: str = ""

    def render(self) -> str:
        return self.value

    def accept(self, raw: str) -> None:
        currency = raw.strip().upper()
        if self.optional and currency == "":
            return
        if currency not in CURRENCIES:
            raise ValidationError("currency must be one of: " + ",".join(CURRENCIES))
        self.value = currency


@dataclass
class PriceValue:
    """
    Expense price: a finite number strictly greater than zero.

    For optional prices both "" and the literal "0" mean "not supplied" and
    leave the current value untouched.

    Usage example
    -------------
        price = PriceValue(optional=True)
        price.accept("0")      # no-op
        price.accept("12.50")
        assert price.value == 12.5
    """

    optional: bool = False
    value: float = 0.0

    def render(self) -> str:
        return f"{self.value:f}"

    def accept(self, raw: str) -> None:
        if self.optional and raw in ("", "0"):
            return
        if _DECIMAL_PATTERN.fullmatch(raw) is None:
            raise ValidationError(f"invalid price {raw!r}: not a number")
        price = float(raw)
        if not math.isfinite(price):
            raise ValidationError(f"invalid price {raw!r}: not a number")
        if price <= 0:
            raise ValidationError("expense price is required and must be bigger than 0")
        self.value = price


@dataclass
class IDListValue:
    """
    Ordered list of expense identifiers with set semantics.

    Each accepted raw value is appended in canonical UUID form; repeats are
    dropped, so the list keeps first-seen order without duplicates.

    Usage example
    -------------
        ids = IDListValue()
        for raw in (a, b, a):
            ids.accept(raw)
        assert ids.values == [a, b]
    """

    values: List[str] = field(default_factory=list)
    _seen: Set[str] = field(default_factory=set, repr=False)

    def render(self) -> str:
        return ",".join(self.values)

    def accept(self, raw: str) -> None:
        try:
            uid = uuid.UUID(raw.strip())
        except ValueError:
            raise ValidationError(f"invalid identifier {raw!r}") from None

        canonical = str(uid)
        if canonical in self._seen:
            return
        self._seen.add(canonical)
        self.values.append(canonical)


@dataclass
class PageValue:
    """Page number for pagination; empty input restores the default "1"."""

    value: str = DEFAULT_PAGE

    def render(self) -> str:
        return self.value

    def accept(self, raw: str) -> None:
        page = raw.strip()
        if page == "":
            self.value = DEFAULT_PAGE
            return
        number = _parse_int(page, "page")
        if number <= 0:
            raise ValidationError("page must be greater than 0")
        self.value = str(number)


@dataclass
class PageSizeValue:
    """Page size for pagination, in (0, MAX_PAGE_SIZE]; empty input restores the default "5"."""

    value: str = DEFAULT_PAGE_SIZE

    def render(self) -> str:
        return self.value

    def accept(self, raw: str) -> None:
        page_size = raw.strip()
        if page_size == "":
            self.value = DEFAULT_PAGE_SIZE
            return
        number = _parse_int(page_size, "page_size")
        if number <= 0 or number > MAX_PAGE_SIZE:
            raise ValidationError(f"page_size must be greater than 0 and at most {MAX_PAGE_SIZE}")
        self.value = str(number)


@dataclass
class EmailValue:
    """
    User email for login/signup, checked for syntactic shape only.

    Usage example
    -------------
        email = EmailValue()
        email.accept(" jane@example.com ")
        assert email.value == "jane@example.com"
    """

    value: str = ""

    def render(self) -> str:
        return self.value

    def accept(self, raw: str) -> None:
        email = raw.strip()
        # Disjoint bounds joined with `and`: never true. The accepted input set
        # must not change, see DESIGN.md.
        if len(email) < EMAIL_MIN_LENGTH and len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError(
                f"the length of the email must be >= {EMAIL_MIN_LENGTH} and <= {EMAIL_MAX_LENGTH}"
            )
        if EMAIL_PATTERN.fullmatch(email) is None:
            raise ValidationError("invalid email address format")
        self.value = email


@dataclass
class PasswordValue:
    """User password for login/signup; see `check_password` for the composition rules."""

    value: str = field(default="", repr=False)

    def render(self) -> str:
        return self.value

    def accept(self, raw: str) -> None:
        check_password(raw)
        self.value = raw


# ==================================================================================================
#                                   HELPERS
# ==================================================================================================

def _parse_int(text: str, name: str) -> int:
    # ASCII digits with an optional sign; int() alone would also take "1_000".
    if _INTEGER_PATTERN.fullmatch(text) is None:
        raise ValidationError(f"invalid {name} provided: {text!r} is not an integer")
    return int(text)


def check_password(password: str) -> None:
    """
    Validate password composition.

    Each character is classified once, first match wins: number, uppercase
    letter, punctuation/symbol, then lowercase letter (a space counts as
    lowercase). Missing classes are reported in the fixed order digit,
    uppercase, lowercase, special symbol, so only the first gap is named.

    Parameters
    ----------
    password
        Raw password text, not trimmed.

    Raises
    ------
    ValidationError
        When a character class is missing.

    Usage example
    -------------
        check_password("Secr3t!pass")
    """
    number = upper = lower = special = False
    for char in password:
        category = unicodedata.category(char)
        if category.startswith("N"):
            number = True
        elif category == "Lu":
            upper = True
        elif category[0] in ("P", "S"):
            special = True
        elif category == "Ll" or char == " ":
            lower = True

    if not number:
        raise ValidationError("the password must have at least 1 digit")
    if not upper:
        raise ValidationError("the password must have at least 1 uppercase letter")
    if not lower:
        raise ValidationError("the password must have at least 1 lowercase letter")
    if not special:
        raise ValidationError("the password must have at least 1 special symbol")
    # Same `and` looseness as the email length check: length never rejects.
    if len(password) < PASSWORD_MIN_LENGTH and len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationError(
            f"the password length must be >= {PASSWORD_MIN_LENGTH} && <= {PASSWORD_MAX_LENGTH}"
        )

"""Typed command-line flag values and the per-command flag sets that parse them."""

from .flagset import (
    FlagSet,
    add_currency_flag,
    add_email_flag,
    add_ids_flag,
    add_page_flag,
    add_page_size_flag,
    add_password_flag,
    add_price_flag,
    add_title_flag,
)
from .values import (
    CurrencyValue,
    EmailValue,
    FlagValue,
    IDListValue,
    PageSizeValue,
    PageValue,
    PasswordValue,
    PriceValue,
    TitleValue,
    check_password,
)

__all__ = [
    "CurrencyValue",
    "EmailValue",
    "FlagSet",
    "FlagValue",
    "IDListValue",
    "PageSizeValue",
    "PageValue",
    "PasswordValue",
    "PriceValue",
    "TitleValue",
    "add_currency_flag",
    "add_email_flag",
    "add_ids_flag",
    "add_page_flag",
    "add_page_size_flag",
    "add_password_flag",
    "add_price_flag",
    "add_title_flag",
    "check_password",
]

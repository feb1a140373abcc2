# ==================================================================================================
#                                   Constants
# ==================================================================================================
#
# Domain limits and defaults shared by flag validation, the HTTP client and the CLI.
# Defining them once here prevents drift between help text, validators and tests.

from typing import Final, Tuple

PROGRAM_NAME: Final[str] = "expenses"

# Currencies accepted by the backend, in the order they are listed in error messages.
CURRENCIES: Final[Tuple[str, ...]] = ("USD", "EUR", "GBP", "MDL")

# Pagination defaults are kept as text: they travel as query parameters untouched.
DEFAULT_PAGE: Final[str] = "1"
DEFAULT_PAGE_SIZE: Final[str] = "5"
MAX_PAGE_SIZE: Final[int] = 25

EMAIL_MIN_LENGTH: Final[int] = 3
EMAIL_MAX_LENGTH: Final[int] = 254
PASSWORD_MIN_LENGTH: Final[int] = 8
PASSWORD_MAX_LENGTH: Final[int] = 32

DEFAULT_API_URL: Final[str] = "http://localhost:8080"
DEFAULT_TIMEOUT_S: Final[float] = 10.0
DEFAULT_CREDENTIALS_FILE: Final[str] = ".credentials.json"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# Environment variables read once by `expenses.settings.resolve_settings`.
ENV_CONFIG_PATH: Final[str] = "EXPENSES_CONFIG"
ENV_API_URL: Final[str] = "EXPENSES_API_URL"

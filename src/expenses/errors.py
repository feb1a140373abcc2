"""
Error types and the command-level error boundary.

Every failure the client can report is an `ExpensesError` subclass, so the CLI
needs exactly one place to turn exceptions into a printed message and an exit
code. That place is `run_command`, which supports two modes:
1) Debug mode: re-raise the original exception (full traceback on the console).
2) Normal mode: capture a structured failure record and return it to the caller.

Keeping this policy centralized avoids ad-hoc try/except blocks in each command
module and keeps failure reporting consistent and testable.
"""

import json
import logging
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

# ==================================================================================================
#                                   EXCEPTIONS
# ==================================================================================================


class ExpensesError(Exception):
    """
    Base class for every error the client reports to the user.

    Usage example
    -------------
        try:
            client.create("Lunch", "EUR", 12.5)
        except ExpensesError as exc:
            raise exc.wrap("could not create expense") from exc
    """

    def wrap(self, prefix: str) -> "ExpensesError":
        """
        Return an error of the same type whose message is `<prefix>: <self>`.

        Parameters
        ----------
        prefix
            Description of the operation that failed.

        Returns
        -------
        ExpensesError
            New error, not yet chained; callers use `raise ... from exc`.
        """
        return type(self)(f"{prefix}: {self}")


class ValidationError(ExpensesError, ValueError):
    """
    Raw flag input failed its field-specific rule.

    Parameters
    ----------
    message
        Field-specific reason, e.g. "page must be greater than 0".
    switch
        Switch spelling the value arrived through, filled in by the flag parser.
    """

    def __init__(self, message: str, *, switch: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.switch = switch

    def __str__(self) -> str:
        if self.switch is None:
            return self.message
        return f"invalid value for {self.switch}: {self.message}"


class FlagParseError(ExpensesError):
    """The argument vector is malformed (unknown switch, missing value, stray argument)."""


class ArgumentCountError(ExpensesError):
    """
    Fewer flags were supplied than the command requires.

    Usage example
    -------------
        raise ArgumentCountError("create", minimum=3, provided=1)
    """

    def __init__(self, command: str, *, minimum: int, provided: int) -> None:
        super().__init__(f"{command} expects at least: {minimum} arg(s), {provided} provided")
        self.command = command
        self.minimum = minimum
        self.provided = provided

    def wrap(self, prefix: str) -> "ArgumentCountError":
        """Keep the counts; only the message gains `prefix`."""
        wrapped = ArgumentCountError(self.command, minimum=self.minimum, provided=self.provided)
        wrapped.args = (f"{prefix}: {self}",)
        return wrapped


class UnknownCommandError(ExpensesError):
    """The first argument does not name a registered command."""


class CollaboratorError(ExpensesError):
    """The remote bookkeeping service call failed (network error or unexpected status)."""


class CredentialError(ExpensesError):
    """The credential record is missing, unreadable or could not be written."""


# ==================================================================================================
#                                   TYPES
# ==================================================================================================

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorPolicy:
    """
    Error handling policy for one CLI invocation.

    Attributes
    ----------
    debug : bool
        If True, exceptions are re-raised (fail-fast with traceback).
        If False, exceptions are captured and returned as a failure record.
    log_path : Path | None
        Optional file that receives one structured entry per failed command.
    """

    debug: bool
    log_path: Optional[Path] = None


@dataclass(frozen=True)
class CommandFailure:
    """
    Structured failure record for non-debug runs.

    Attributes
    ----------
    command : str
        Name of the command that failed.
    context : dict[str, Any]
        Non-sensitive metadata about the invocation.
    exc_type : str
        Exception class name.
    message : str
        Exception message, already wrapped by the command.
    traceback : str
        Full traceback.
    timestamp_utc : str
        ISO timestamp.
    """

    command: str
    context: dict[str, Any]
    exc_type: str
    message: str
    traceback: str
    timestamp_utc: str


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """
    Result wrapper: either value or failure.

    Usage example
    -------------
        result = run_command(policy, "create", {"command": "create"}, dispatch, command, args, ctx)
        if result.failure is not None:
            print(result.failure.message, file=sys.stderr)
        else:
            print(result.value)
    """

    value: Optional[T]
    failure: Optional[CommandFailure]


# ==================================================================================================
#                                   HELPERS
# ==================================================================================================

def make_failure_logger(*, log_path: Optional[Path]) -> logging.Logger:
    """
    Return the logger that records command failures.

    When `log_path` is given a file handler is attached once per path; repeated
    calls (tests, embedding) do not duplicate handlers. The logger does not
    propagate: the console already receives the wrapped message from `main`.
    """
    logger = logging.getLogger("expenses.failures")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    if not logger.handlers:
        # Keeps logging's last-resort stderr handler from echoing failures.
        logger.addHandler(logging.NullHandler())

    if log_path is None:
        return logger

    # Ensure the log directory exists before creating the file handler.
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if not any(isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path) for h in logger.handlers):
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# ==================================================================================================
#                                   CORE LOGIC
# ==================================================================================================

def run_command(
    policy: ErrorPolicy,
    command: str,
    context: dict[str, Any],
    func: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> CommandResult[T]:
    """
    Run one command with policy-controlled error handling.

    In debug mode, re-raises exceptions to halt immediately.
    In normal mode, logs the failure and returns CommandResult(value=None, failure=...).

    Usage example
    -------------
        policy = ErrorPolicy(debug=False)
        res = run_command(policy, "delete", {"command": "delete"}, dispatch, command, args, ctx)
        if res.failure:
            return 1
    """
    logger = make_failure_logger(log_path=policy.log_path)

    try:
        value = func(*args, **kwargs)
        return CommandResult(value=value, failure=None)
    except Exception as exc:  # noqa: BLE001 (intentional: boundary catch)
        tb = traceback.format_exc()
        failure = CommandFailure(
            command=command,
            context=context,
            exc_type=type(exc).__name__,
            message=str(exc),
            traceback=tb,
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
        )

        # The context never carries flag values, so passwords stay out of the log.
        logger.error("%s failed | %s: %s", command, failure.exc_type, failure.message)
        logger.error("context=%s", json.dumps(context, ensure_ascii=False))
        logger.debug("traceback=%s", tb)

        if policy.debug:
            raise

        return CommandResult(value=None, failure=failure)

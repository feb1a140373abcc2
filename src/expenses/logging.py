# ==================================================================================================
#                                   Logging
# ==================================================================================================
#
# Tiny logging bootstrap used by the CLI entrypoint.
# Library modules only call `logging.getLogger(__name__)`; the level and format are
# decided here once, from the configured `logging.level` setting.

import logging
from typing import Union


def resolve_level(level: Union[int, str]) -> int:
    """
    Convert a level name ("debug", "WARNING") or number into a logging level.

    Parameters
    ----------
    level
        Level name (case-insensitive) or numeric level.

    Returns
    -------
    int
        Numeric logging level.

    Usage example
    -------------
        resolve_level("info")  # -> logging.INFO
    """
    if isinstance(level, int):
        return level

    numeric = logging.getLevelName(str(level).strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return numeric


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """
    Configure global logging once.

    Parameters
    ----------
    level
        Logging level, as a name or number.

    Usage example
    -------------
        configure_logging("DEBUG")
        logging.getLogger(__name__).debug("dispatching create")
    """
    # Repeated calls keep the first configuration (no `force=True`) so embedding
    # applications and pytest's log capture are left alone.
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

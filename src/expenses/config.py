# ==================================================================================================
#                               Config loading
# ==================================================================================================
#
# This module defines the *single, canonical entry point* for reading client
# configuration from disk.
#
# The client relies on an optional YAML config file to define:
#   - where the bookkeeping service lives (api.url, api.timeout_s)
#   - where the credential record is persisted (credentials.path)
#   - logging behaviour (logging.level, logging.file) and debug mode
#
# This module only loads and packages raw config data. Turning raw values into
# typed settings (and applying defaults) happens in `expenses.settings`.
#

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml


# ==================================================================================================
#                                   TYPES
# ==================================================================================================

@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Parsed client configuration.

    Parameters
    ----------
    raw
        Raw config dictionary loaded from YAML.

    Usage example
    -------------
        cfg = load_client_config(Path("~/.config/expenses/config.yaml").expanduser())
        api_url = cfg.raw["api"]["url"]
    """

    raw: Dict[str, Any]


# ==================================================================================================
#                                       IO
# ==================================================================================================

def load_client_config(config_path: Path) -> ClientConfig:
    """
    Load YAML config into a ClientConfig object.

    Parameters
    ----------
    config_path
        Path to YAML config file.

    Returns
    -------
    ClientConfig
        Loaded configuration. An empty file yields an empty mapping.

    Usage example
    -------------
        cfg = load_client_config(Path("config.yaml"))
        print(cfg.raw.get("debug", False))
    """
    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    if not isinstance(data, Mapping):
        raise ValueError(f"Config must be a mapping at top-level, got: {type(data)}")

    return ClientConfig(raw=dict(data))

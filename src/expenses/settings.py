# ==================================================================================================
#                               Client settings
# ==================================================================================================
#
# This module converts loosely typed config entries into an explicit, strongly
# named container (`ClientSettings`) so the CLI never passes raw dicts around.
# The process environment is handed in explicitly; nothing here reads os.environ.

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import ClientConfig, load_client_config
from .constants import (
    DEFAULT_API_URL,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_S,
    ENV_API_URL,
    ENV_CONFIG_PATH,
)

# ==================================================================================================
#                                   TYPES
# ==================================================================================================

@dataclass(frozen=True, slots=True)
class ClientSettings:
    """
    Resolved client settings.

    Parameters
    ----------
    api_url
        Base URL of the bookkeeping service.
    timeout_s
        Per-request transport timeout in seconds.
    credentials_path
        File holding the persisted credential record.
    log_level
        Root logging level name.
    log_path
        Optional file receiving command failure records.
    debug
        Re-raise command failures instead of printing a wrapped message.

    Usage example
    -------------
        settings = ClientSettings.from_config(load_client_config(Path("config.yaml")))
        print(settings.api_url)
    """

    api_url: str = DEFAULT_API_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    credentials_path: Path = Path(DEFAULT_CREDENTIALS_FILE)
    log_level: str = DEFAULT_LOG_LEVEL
    log_path: Optional[Path] = None
    debug: bool = False

    @staticmethod
    def from_config(cfg: ClientConfig) -> "ClientSettings":
        """
        Construct ClientSettings from config, applying defaults for missing keys.

        Parameters
        ----------
        cfg
            Client configuration.

        Returns
        -------
        ClientSettings
            Resolved settings.

        Usage example
        -------------
            settings = ClientSettings.from_config(ClientConfig(raw={"api": {"url": "http://api"}}))
        """
        api_cfg = _section(cfg, "api")
        credentials_cfg = _section(cfg, "credentials")
        logging_cfg = _section(cfg, "logging")

        # Cast values via str()/float() so YAML scalar types are handled
        # consistently whether users quote fields or not.
        log_file = logging_cfg.get("file")
        return ClientSettings(
            api_url=str(api_cfg.get("url", DEFAULT_API_URL)).rstrip("/"),
            timeout_s=float(api_cfg.get("timeout_s", DEFAULT_TIMEOUT_S)),
            credentials_path=Path(str(credentials_cfg.get("path", DEFAULT_CREDENTIALS_FILE))).expanduser(),
            log_level=str(logging_cfg.get("level", DEFAULT_LOG_LEVEL)),
            log_path=Path(str(log_file)).expanduser() if log_file else None,
            debug=bool(cfg.raw.get("debug", False)),
        )


# ==================================================================================================
#                                   HELPERS
# ==================================================================================================

def _section(cfg: ClientConfig, name: str) -> Mapping[str, Any]:
    section = cfg.raw.get(name, None)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section must be a mapping: {name}")
    return section


def resolve_settings(env: Mapping[str, str]) -> ClientSettings:
    """
    Build settings from the optional config file and environment overrides.

    Parameters
    ----------
    env
        Process environment (or a test double). `EXPENSES_CONFIG` points at the
        YAML file; `EXPENSES_API_URL` overrides `api.url`.

    Returns
    -------
    ClientSettings
        Resolved settings.

    Usage example
    -------------
        settings = resolve_settings(os.environ)
    """
    config_path = env.get(ENV_CONFIG_PATH, "").strip()
    if config_path:
        cfg = load_client_config(Path(config_path).expanduser())
    else:
        cfg = ClientConfig(raw={})

    settings = ClientSettings.from_config(cfg)

    api_url = env.get(ENV_API_URL, "").strip()
    if api_url:
        return replace(settings, api_url=api_url.rstrip("/"))
    return settings

"""
App settings for the Graph / SharePoint integration.
Settings are read from the Function App configuration (environment) once per
worker process and passed explicitly to the Graph helpers.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Mapping, Optional

DEFAULT_GRAPH_SCOPE = "https://graph.microsoft.com/.default"
DEFAULT_HTTP_TIMEOUT = 30.0

REQUIRED_CONFIG = (
    "GRAPH_TENANT_ID",
    "GRAPH_CLIENT_ID",
    "GRAPH_CLIENT_SECRET",
    "SHAREPOINT_SITE_ID",
    "SHAREPOINT_LIST_ID",
)


class ConfigurationMissing(Exception):
    """Raised when required app settings are absent or blank."""

    def __init__(self, missing_keys: List[str]):
        self.missing_keys = list(missing_keys)
        super().__init__(
            "Missing required app settings: " + ", ".join(self.missing_keys)
        )


@dataclass(frozen=True)
class Settings:
    tenant_id: str
    client_id: str
    client_secret: str
    site_id: str
    list_id: str
    scope: str = DEFAULT_GRAPH_SCOPE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def get_missing_config_keys(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the required keys that are unset or whitespace-only, in declaration order."""
    env = os.environ if environ is None else environ
    return [key for key in REQUIRED_CONFIG if not (env.get(key) or "").strip()]


def _read_timeout(raw: Optional[str]) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_HTTP_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_HTTP_TIMEOUT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.
    Raises ConfigurationMissing listing every absent required key.
    GRAPH_SCOPE and GRAPH_HTTP_TIMEOUT are optional.
    """
    env = os.environ if environ is None else environ
    missing = get_missing_config_keys(env)
    if missing:
        raise ConfigurationMissing(missing)

    return Settings(
        tenant_id=env["GRAPH_TENANT_ID"].strip(),
        client_id=env["GRAPH_CLIENT_ID"].strip(),
        client_secret=env["GRAPH_CLIENT_SECRET"].strip(),
        site_id=env["SHAREPOINT_SITE_ID"].strip(),
        list_id=env["SHAREPOINT_LIST_ID"].strip(),
        scope=(env.get("GRAPH_SCOPE") or "").strip() or DEFAULT_GRAPH_SCOPE,
        http_timeout=_read_timeout(env.get("GRAPH_HTTP_TIMEOUT")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this worker process. A failed load is not cached."""
    return load_settings()

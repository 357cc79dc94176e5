"""
Microsoft Graph helpers: app-only token acquisition and SharePoint list reads.
These helpers raise on failure and do not log; the function entry points own logging.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from shared.config import Settings

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
TOKEN_ENDPOINT = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"

UNKNOWN_TOKEN_ERROR = "unknown_token_error"
UNKNOWN_GRAPH_ERROR = "unknown_graph_error"


# ============================================================================
# Errors
# ============================================================================

class GraphRequestError(Exception):
    """A Graph or identity-provider call returned an unusable response."""

    prefix = "Graph request failed"

    def __init__(self, status_code: int, error_code: str, error_message: str = ""):
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(
            f"{self.prefix} ({status_code}) {error_code} {error_message}".strip()
        )


class AuthFailure(GraphRequestError):
    prefix = "Graph token request failed"


class FetchFailure(GraphRequestError):
    prefix = "Graph list read failed"


def _read_json_object(response) -> Dict[str, Any]:
    """Decode a response body, treating anything but a JSON object as empty."""
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


# ============================================================================
# Token Provider
# ============================================================================

def get_graph_access_token(settings: Settings) -> str:
    """
    Exchange the app's client credentials for an app-only Graph token.
    A fresh token is requested on every call.
    """
    url = TOKEN_ENDPOINT.format(tenant_id=quote(settings.tenant_id, safe=""))
    form = {
        "client_id": settings.client_id,
        "client_secret": settings.client_secret,
        "scope": settings.scope,
        "grant_type": "client_credentials",
    }
    response = requests.post(
        url,
        data=form,
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=settings.http_timeout,
    )
    payload = _read_json_object(response)
    access_token = payload.get("access_token")

    if not response.ok or not isinstance(access_token, str) or not access_token:
        raise AuthFailure(
            response.status_code,
            _text(payload.get("error"), UNKNOWN_TOKEN_ERROR),
            _text(payload.get("error_description"), ""),
        )
    return access_token


# ============================================================================
# List Fetcher
# ============================================================================

@dataclass(frozen=True)
class ListQuery:
    filter_expression: Optional[str] = None
    top: Optional[int] = None
    expand_fields: bool = True

    def to_params(self) -> Dict[str, str]:
        params = {}
        if self.expand_fields:
            params["$expand"] = "fields"
        if self.filter_expression:
            params["$filter"] = self.filter_expression
        if self.top is not None:
            params["$top"] = str(self.top)
        return params


def list_items_url(settings: Settings) -> str:
    return "{base}/sites/{site}/lists/{list}/items".format(
        base=GRAPH_BASE_URL,
        site=quote(settings.site_id, safe=""),
        list=quote(settings.list_id, safe=""),
    )


def _graph_get(url: str, access_token: str, params: Dict[str, str], timeout: float) -> Dict[str, Any]:
    response = requests.get(
        url,
        params=params,
        headers={"Authorization": f"Bearer {access_token}"},
        timeout=timeout,
    )
    payload = _read_json_object(response)

    if not response.ok:
        error = payload.get("error")
        error = error if isinstance(error, dict) else {}
        raise FetchFailure(
            response.status_code,
            _text(error.get("code"), UNKNOWN_GRAPH_ERROR),
            _text(error.get("message"), ""),
        )
    return payload


def get_list_items_payload(access_token: str, settings: Settings, query: ListQuery) -> Dict[str, Any]:
    """Read one page of list items and return the Graph payload unchanged."""
    return _graph_get(list_items_url(settings), access_token, query.to_params(), settings.http_timeout)


def get_list_item_fields(access_token: str, settings: Settings, query: ListQuery) -> List[Dict[str, Any]]:
    """
    Read one page of list items and return each item's `fields` bag.
    Items without a field bag come back as {} so the result lines up 1:1 with Graph's `value`.
    """
    payload = get_list_items_payload(access_token, settings, query)
    items = payload.get("value")
    if not isinstance(items, list):
        return []

    fields_only = []
    for item in items:
        fields = item.get("fields") if isinstance(item, dict) else None
        fields_only.append(fields if isinstance(fields, dict) else {})
    return fields_only

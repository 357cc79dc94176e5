"""
SharePoint list test: GET api/sharepoint-list-test?top=N.
Connectivity check that returns the raw Graph list payload (first N items, 1..25).
"""
import azure.functions as func
import logging
import os
import re

import requests

from shared.config import get_missing_config_keys, get_settings
from shared.graph import GraphRequestError, ListQuery, get_graph_access_token, get_list_items_payload
from shared.helpers import error_response, invocation_id, json_response

logger = logging.getLogger(__name__)

DEFAULT_TOP = 3
MAX_TOP = 25
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def get_top_value(raw) -> int:
    """Clamp the requested row count to 1..MAX_TOP; non-numeric -> DEFAULT_TOP."""
    m = LEADING_INT_RE.match(str(raw)) if raw is not None else None
    if not m:
        return DEFAULT_TOP
    requested = int(m.group(1))
    if requested < 1:
        return 1
    if requested > MAX_TOP:
        return MAX_TOP
    return requested


def main(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    logger.info("SharePoint list test function processed a request.")

    missing_config = get_missing_config_keys(os.environ)
    if missing_config:
        return json_response({
            "ok": False,
            "error": "Missing required app settings for Graph/SharePoint integration.",
            "missingConfig": missing_config,
        }, 500)

    settings = get_settings()
    top = get_top_value(req.params.get("top"))

    try:
        access_token = get_graph_access_token(settings)
        payload = get_list_items_payload(access_token, settings, ListQuery(top=top))
    except (GraphRequestError, requests.RequestException) as e:
        logger.error(
            "SharePoint list test failed (invocation_id=%s): %s",
            invocation_id(context), e,
        )
        return error_response("Unable to read SharePoint list via Microsoft Graph.", str(e), status=502)

    logger.info(
        "SharePoint list test succeeded (invocation_id=%s, top=%d)",
        invocation_id(context), top,
    )
    return json_response({
        "ok": True,
        "siteId": settings.site_id,
        "listId": settings.list_id,
        "top": top,
        "result": payload,
    })

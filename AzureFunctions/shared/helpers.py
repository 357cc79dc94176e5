"""
Shared helper functions for the HTTP functions: JSON responses and request parsing.
"""
import json
from typing import Any, Dict, Optional

import azure.functions as func

MAX_NAME_LENGTH = 80


# ============================================================================
# Response Helpers
# ============================================================================

def json_response(data: Dict[str, Any], status: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(data),
        status_code=status,
        mimetype="application/json",
    )


def error_response(error: str, details: str, status: int = 502, **extra: Any) -> func.HttpResponse:
    """Failure envelope: {ok: false, error, details, ...extra}."""
    body = {"ok": False, "error": error, "details": details}
    body.update(extra)
    return json_response(body, status)


def invocation_id(context: Optional[func.Context]) -> Optional[str]:
    return getattr(context, "invocation_id", None) if context is not None else None


# ============================================================================
# Request Helpers
# ============================================================================

def sanitize_name(value: Optional[str]) -> Optional[str]:
    """Trim and cap a caller-supplied name; blank -> None."""
    if not value:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return trimmed[:MAX_NAME_LENGTH]


def read_name_from_body(req: func.HttpRequest) -> Optional[str]:
    """
    POST body may be plain text ("alex") or JSON ({"name": "alex"}).
    JSON that fails to parse, or has no string name, is read as plain text.
    """
    if req.method != "POST":
        return None

    body_text = (req.get_body() or b"").decode("utf-8", errors="replace").strip()
    if not body_text:
        return None

    content_type = (req.headers.get("content-type") or "").lower()
    if "application/json" in content_type:
        try:
            parsed = json.loads(body_text)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict) and isinstance(parsed.get("name"), str):
            return sanitize_name(parsed["name"])

    return sanitize_name(body_text)


def resolve_name(req: func.HttpRequest, default: str = "world") -> Dict[str, Any]:
    """Query string wins, then POST body, then the default."""
    query_name = sanitize_name(req.params.get("name"))
    body_name = read_name_from_body(req)
    return {
        "name": query_name or body_name or default,
        "has_query_name": bool(query_name),
        "has_body_name": bool(body_name),
    }

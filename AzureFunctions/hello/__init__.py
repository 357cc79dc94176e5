"""
Hello: JSON greeting used to smoke-test the Function App.
"""
import azure.functions as func
import logging

from shared.helpers import invocation_id, json_response, resolve_name

logger = logging.getLogger(__name__)


def main(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    resolved = resolve_name(req)
    logger.info(
        "Hello function processed a request (method=%s, has_query_name=%s, has_body_name=%s, invocation_id=%s)",
        req.method,
        resolved["has_query_name"],
        resolved["has_body_name"],
        invocation_id(context),
    )
    return json_response({
        "message": f"Hello, {resolved['name']}!",
        "invocationId": invocation_id(context),
    })

"""
Overdue invoice reminder: GET api/overdue-invoice-reminder.
Runs the overdue filter query against the SharePoint invoice list and returns mapped records.
"""
import azure.functions as func
import logging

import requests

from shared.config import ConfigurationMissing, get_settings
from shared.graph import GraphRequestError
from shared.helpers import error_response, invocation_id, json_response
from shared.reminders import OVERDUE_INVOICE_FILTER, get_overdue_invoices

logger = logging.getLogger(__name__)

UPSTREAM_ERROR = "Unable to run SharePoint filter query via Microsoft Graph."
CONFIG_ERROR = "Missing required app settings for Graph/SharePoint integration."


def main(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    logger.info("Overdue invoice reminder function processed a request.")
    try:
        settings = get_settings()
        fields = get_overdue_invoices(settings)
    except ConfigurationMissing as e:
        logger.error(
            "Overdue invoice reminder filter query failed (invocation_id=%s): %s",
            invocation_id(context), e,
        )
        return error_response(CONFIG_ERROR, str(e), status=500, missingConfig=e.missing_keys)
    except (GraphRequestError, requests.RequestException) as e:
        logger.error(
            "Overdue invoice reminder filter query failed (invocation_id=%s): %s",
            invocation_id(context), e,
        )
        return error_response(UPSTREAM_ERROR, str(e), status=502)

    logger.info(
        "Overdue invoice reminder filter query succeeded (invocation_id=%s, count=%d)",
        invocation_id(context), len(fields),
    )
    return json_response({
        "ok": True,
        "filter": OVERDUE_INVOICE_FILTER,
        "fields": fields,
    })

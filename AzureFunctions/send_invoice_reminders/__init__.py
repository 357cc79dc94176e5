"""
Send invoice reminders: timer trigger (weekday mornings).
Fetches overdue invoices and sends one reminder per invoice. Any failure fails the run.
"""
import azure.functions as func
import logging

from shared.config import get_settings
from shared.reminders import send_reminder_emails

logger = logging.getLogger(__name__)


def main(timer: func.TimerRequest) -> None:
    if timer.past_due:
        logger.warning("Send invoice reminders timer is past due.")

    sent = send_reminder_emails(get_settings())
    logger.info("Send invoice reminders finished: %d reminder(s) sent.", sent)

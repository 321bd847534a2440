"""Overdue Notice Delivery

Log, webhook and fan-out implementations of NotificationService.
"""

import logging
from typing import Any, Dict, List, Optional
import httpx
from invoicing.app.services.notification_service import NotificationService
from invoicing.domain.invoice import Invoice

logger = logging.getLogger(__name__)


def overdue_payload(invoice: Invoice) -> Dict[str, Any]:
    """JSON body describing an overdue invoice"""
    return {
        "type": "invoice_overdue",
        "invoice_id": invoice.id,
        "org_id": invoice.org_id,
        "contact_id": invoice.contact_id,
        "invoice_number": invoice.invoice_number,
        "currency": invoice.currency,
        "amount_total": str(invoice.amount_total),
        "due_date": invoice.due_date.isoformat() if invoice.due_date else None,
    }


class LoggingNotificationService(NotificationService):
    """Writes overdue notices to the log; the default channel"""

    async def send_overdue_notice(self, invoice: Invoice) -> bool:
        logger.warning(
            f"[OVERDUE] Org: {invoice.org_id}, Invoice: {invoice.invoice_number}, "
            f"Amount: {invoice.currency} {invoice.amount_total}, "
            f"Due: {invoice.due_date.isoformat() if invoice.due_date else 'n/a'}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Posts overdue notices as JSON to a webhook

    Delivery failures are logged and reported as False; they never raise.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Args:
            webhook_url: URL to POST notices to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_overdue_notice(self, invoice: Invoice) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=overdue_payload(invoice))
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                f"Webhook notice for invoice {invoice.invoice_number} to {self.webhook_url} failed: {e}"
            )
            return False

        logger.info(f"Webhook notice sent for invoice {invoice.invoice_number}")
        return True


class CompositeNotificationService(NotificationService):
    """Sends every notice to all channels; succeeds if any channel did"""

    def __init__(self, services: List[NotificationService]):
        self.services = services

    async def send_overdue_notice(self, invoice: Invoice) -> bool:
        delivered = False
        for service in self.services:
            try:
                delivered = await service.send_overdue_notice(invoice) or delivered
            except Exception as e:
                logger.error(f"Notification channel {type(service).__name__} failed: {e}")
        return delivered


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Build the notification channel(s) for the overdue worker

    Args:
        webhook_url: Optional webhook; when set, notices go to log and webhook

    Returns:
        Configured NotificationService
    """
    if not webhook_url:
        return LoggingNotificationService()
    return CompositeNotificationService(
        [LoggingNotificationService(), WebhookNotificationService(webhook_url)]
    )

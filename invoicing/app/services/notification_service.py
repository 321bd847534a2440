"""Notification Service Interface

Defines the contract for telling someone that an invoice became overdue.
"""

from abc import ABC, abstractmethod
from invoicing.domain.invoice import Invoice


class NotificationService(ABC):
    """
    Abstract notification service for overdue invoices

    Implementations can send notifications via:
    - Log output
    - Webhook (HTTP POST)
    - Several channels at once
    """

    @abstractmethod
    async def send_overdue_notice(self, invoice: Invoice) -> bool:
        """
        Send notice for an invoice that became overdue

        Args:
            invoice: Invoice now in overdue status

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass

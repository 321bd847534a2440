"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import date
from invoicing.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for invoicing operations.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_org_id(
        self,
        org_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve invoices of a tenant, newest first

        Args:
            org_id: Organization ID
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def generate_invoice_number(self, org_id: str, prefix: str, year: int) -> str:
        """
        Generate the next invoice number of a tenant

        Format: {prefix}-{year}-{sequence:04d} (e.g., INV-2026-0001), the
        sequence restarts every year.

        Args:
            org_id: Organization ID
            prefix: Tenant invoice prefix
            year: Invoice year

        Returns:
            Invoice number not yet used by the tenant
        """
        pass

    @abstractmethod
    async def get_overdue_candidates(self, today: date) -> List[Invoice]:
        """
        Retrieve sent invoices whose due date lies before today

        Args:
            today: Reference date

        Returns:
            List of invoices to mark overdue
        """
        pass

"""Invoice Line Item Repository Interface

Defines the contract for invoice line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from invoicing.domain.invoice_line_item import InvoiceLineItem


class InvoiceLineItemRepository(ABC):
    """Repository interface for InvoiceLineItem persistence"""

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        """
        Retrieve all line items of an invoice ordered by sort_order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLineItem
        """
        pass

    @abstractmethod
    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        """
        Persist the line items of a new invoice

        Args:
            line_items: Line items referencing an existing invoice

        Returns:
            Created line items
        """
        pass

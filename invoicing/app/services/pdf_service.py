"""PDF Generation Service Interface

Defines the contract for rendering prepared invoice documents.
"""

from abc import ABC, abstractmethod
from invoicing.domain.invoice_document import InvoiceDocument


class InvoicePdfService(ABC):
    """
    Service interface for PDF generation

    Receives a fully prepared InvoiceDocument; implementations only lay it out.
    """

    @abstractmethod
    def render(self, document: InvoiceDocument) -> bytes:
        """
        Render an invoice document

        Args:
            document: Prepared invoice content

        Returns:
            PDF document as bytes
        """
        pass

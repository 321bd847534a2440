from .organization_repository import OrganizationRepository
from .contact_repository import ContactRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_item_repository import InvoiceLineItemRepository

__all__ = [
    "OrganizationRepository",
    "ContactRepository",
    "InvoiceRepository",
    "InvoiceLineItemRepository",
]

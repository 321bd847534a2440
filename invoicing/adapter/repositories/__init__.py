from .organization_repository import SqlAlchemyOrganizationRepository
from .contact_repository import SqlAlchemyContactRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_item_repository import SqlAlchemyInvoiceLineItemRepository

__all__ = [
    "SqlAlchemyOrganizationRepository",
    "SqlAlchemyContactRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineItemRepository",
]

"""GetInvoice Use Case

Loads one invoice together with its line items.
"""

from invoicing.libs.result import Result, Return, Error
from invoicing.app.repositories.invoice_repository import InvoiceRepository
from invoicing.app.repositories.invoice_line_item_repository import InvoiceLineItemRepository
from .dtos import InvoiceResponseDTO


class GetInvoice:
    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: InvoiceLineItemRepository,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo

    async def execute(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)
            return Return.ok(InvoiceResponseDTO.from_entity(invoice, line_items))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to load invoice",
                    reason=str(e),
                )
            )

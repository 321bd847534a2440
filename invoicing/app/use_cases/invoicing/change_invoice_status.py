"""ChangeInvoiceStatus Use Case

Moves an invoice along its lifecycle: send, mark paid, cancel.
"""

import logging
from invoicing.libs.result import Result, Return, Error
from invoicing.app.services.unit_of_work import UnitOfWork
from invoicing.app.repositories.invoice_repository import InvoiceRepository
from invoicing.domain.base import utc_now
from invoicing.domain.invoice import InvoiceStatus, can_transition
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)


class ChangeInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. Only transitions of the status table are allowed
    2. paid and cancelled are terminal
    3. paid_at is stamped when the invoice is marked paid

    Flow:
    1. Retrieve invoice
    2. Validate transition
    3. Update status (and paid_at)
    4. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def send(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        return await self.execute(invoice_id, InvoiceStatus.SENT)

    async def mark_paid(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        return await self.execute(invoice_id, InvoiceStatus.PAID)

    async def cancel(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        return await self.execute(invoice_id, InvoiceStatus.CANCELLED)

    async def execute(self, invoice_id: str, target: InvoiceStatus) -> Result[InvoiceResponseDTO]:
        """
        Execute status change

        Args:
            invoice_id: Invoice ID
            target: Requested status

        Returns:
            Result[InvoiceResponseDTO]: Updated invoice or error
        """
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

            current = InvoiceStatus(invoice.status)
            if not can_transition(current, target):
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message=f"Invoice {invoice.invoice_number} cannot move from "
                                f"{current.value} to {target.value}",
                        reason="Transition not allowed",
                    )
                )

            invoice.status = target
            if target == InvoiceStatus.PAID:
                invoice.paid_at = utc_now()

            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {updated.invoice_number}: {current.value} -> {target.value}")
            return Return.ok(InvoiceResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_INVOICE_STATUS_FAILED",
                    message="Failed to change invoice status",
                    reason=str(e),
                )
            )

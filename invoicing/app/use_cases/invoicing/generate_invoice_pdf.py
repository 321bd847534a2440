"""GenerateInvoicePdf Use Case

Renders the downloadable PDF of an invoice.
"""

import logging
from typing import Any, Dict, Optional
from invoicing.libs.result import Result, Return, Error
from invoicing.app.repositories.invoice_repository import InvoiceRepository
from invoicing.app.repositories.invoice_line_item_repository import InvoiceLineItemRepository
from invoicing.app.repositories.contact_repository import ContactRepository
from invoicing.app.repositories.organization_repository import OrganizationRepository
from invoicing.app.services.pdf_service import InvoicePdfService
from invoicing.domain.billing_settings import BillingSettings
from invoicing.domain.invoice_document import build_invoice_document
from invoicing.domain.payment_slip import PaymentSlipError
from .dtos import InvoicePdfDTO

logger = logging.getLogger(__name__)


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist
    2. A deleted contact does not block rendering (billee falls back to a generic name)
    3. swiss_qr invoices need a valid payment slip, otherwise INVALID_PAYMENT_SLIP
    4. Output is the full document; nothing partial is returned

    Flow:
    1. Retrieve invoice, line items, contact and organization
    2. Resolve billing settings
    3. Build the document model
    4. Render PDF
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: InvoiceLineItemRepository,
        contact_repo: ContactRepository,
        organization_repo: OrganizationRepository,
        pdf_service: InvoicePdfService,
        settings_defaults: Optional[Dict[str, Any]] = None,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.contact_repo = contact_repo
        self.organization_repo = organization_repo
        self.pdf_service = pdf_service
        self.settings_defaults = settings_defaults or {}

    async def execute(self, invoice_id: str) -> Result[InvoicePdfDTO]:
        """
        Execute PDF generation

        Args:
            invoice_id: Invoice ID

        Returns:
            Result[InvoicePdfDTO]: Success with PDF bytes or error
        """
        try:
            # Step 1: Retrieve data
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
            contact = None
            if invoice.contact_id:
                contact = await self.contact_repo.get_by_id(invoice.contact_id)
            organization = await self.organization_repo.get_by_id(invoice.org_id)

            # Step 2: Settings
            settings = BillingSettings.from_settings(
                organization.settings if organization else None, self.settings_defaults
            )

            # Step 3: Document model
            try:
                document = build_invoice_document(invoice, line_items, contact, settings)
            except PaymentSlipError as e:
                logger.warning(f"Invoice {invoice.invoice_number} has no valid payment slip: {e}")
                return Return.err(
                    Error(
                        code="INVALID_PAYMENT_SLIP",
                        message=f"Payment slip for invoice {invoice.invoice_number} is invalid",
                        reason=str(e),
                    )
                )

            # Step 4: Render
            content = self.pdf_service.render(document)

            return Return.ok(
                InvoicePdfDTO(
                    invoice_number=invoice.invoice_number,
                    filename=f"{invoice.invoice_number}.pdf",
                    content=content,
                )
            )

        except Exception as e:
            logger.exception(f"Failed to generate PDF for invoice {invoice_id}")
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )

"""CreateInvoice Use Case

Creates a draft invoice with its line items for one of the tenant's contacts.
"""

import logging
import re
from datetime import date, timedelta
from typing import Any, Dict, Optional
from invoicing.libs.result import Result, Return, Error
from invoicing.app.services.unit_of_work import UnitOfWork
from invoicing.app.repositories.invoice_repository import InvoiceRepository
from invoicing.app.repositories.invoice_line_item_repository import InvoiceLineItemRepository
from invoicing.app.repositories.contact_repository import ContactRepository
from invoicing.app.repositories.organization_repository import OrganizationRepository
from invoicing.domain.billing_settings import BillingSettings
from invoicing.domain.invoice import Invoice, InvoiceStatus, InvoiceType
from invoicing.domain.invoice_line_item import InvoiceLineItem
from invoicing.domain.qr_reference import is_qr_iban, make_creditor_reference, make_qr_reference
from invoicing.domain.tax_rates import get_supported_currencies
from invoicing.domain.totals import calculate_totals
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


def payment_reference(invoice_number: str, account: str) -> Optional[str]:
    """
    Structured reference derived from the invoice number

    QR reference for a QR-IBAN, creditor reference for any other account,
    None when the tenant has no account yet.
    """
    if not account:
        return None
    if is_qr_iban(account):
        return make_qr_reference(re.sub(r"\D", "", invoice_number)[-26:])
    return make_creditor_reference(re.sub(r"[^A-Za-z0-9]", "", invoice_number)[-21:])


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. Contact must belong to the issuing organization
    2. Currency must be one the tax table knows (tenant default when omitted)
    3. Invoice number is {prefix}-{year}-{sequence:04d}, sequence per tenant and year
    4. Due date defaults to invoice date + payment terms
    5. Totals are calculated from the line items, never taken from the caller
    6. swiss_qr invoices get a structured payment reference

    Flow:
    1. Load organization and resolve billing settings
    2. Validate contact and currency
    3. Calculate totals and generate invoice number
    4. Persist invoice and line items
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: InvoiceLineItemRepository,
        contact_repo: ContactRepository,
        organization_repo: OrganizationRepository,
        settings_defaults: Optional[Dict[str, Any]] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.contact_repo = contact_repo
        self.organization_repo = organization_repo
        self.settings_defaults = settings_defaults or {}

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with org, contact and line items

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        try:
            # Step 1: Organization and its billing settings
            organization = await self.organization_repo.get_by_id(command.org_id)
            if not organization:
                return Return.err(
                    Error(
                        code="ORGANIZATION_NOT_FOUND",
                        message=f"Organization {command.org_id} not found",
                        reason="Organization does not exist",
                    )
                )

            settings = BillingSettings.from_settings(organization.settings, self.settings_defaults)

            # Step 2: Contact and currency
            contact = await self.contact_repo.get_by_id(command.contact_id, org_id=command.org_id)
            if not contact:
                return Return.err(
                    Error(
                        code="CONTACT_NOT_FOUND",
                        message=f"Contact {command.contact_id} not found",
                        reason="Contact does not exist or belongs to another organization",
                    )
                )

            currency = (command.currency or settings.default_currency).upper()
            supported = get_supported_currencies()
            if currency not in supported:
                return Return.err(
                    Error(
                        code="UNSUPPORTED_CURRENCY",
                        message=f"Currency {currency} is not supported",
                        reason=f"Supported currencies: {', '.join(supported)}",
                    )
                )

            # Step 3: Line items, totals and number
            line_items = [
                InvoiceLineItem(
                    invoice_id="",
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    tax_rate=item.tax_rate if item.tax_rate is not None else settings.default_tax_rate,
                    sort_order=position,
                )
                for position, item in enumerate(command.line_items)
            ]
            totals = calculate_totals(line_items)

            invoice_date = command.invoice_date or date.today()
            due_date = command.due_date or invoice_date + timedelta(days=settings.payment_terms_days)

            invoice_number = await self.invoice_repo.generate_invoice_number(
                org_id=command.org_id,
                prefix=settings.invoice_prefix,
                year=invoice_date.year,
            )

            account = settings.account or None
            qr_reference = None
            if command.invoice_type == InvoiceType.SWISS_QR:
                qr_reference = payment_reference(invoice_number, settings.account)

            # Step 4: Persist
            invoice = Invoice(
                org_id=command.org_id,
                contact_id=contact.id,
                invoice_number=invoice_number,
                currency=currency,
                invoice_type=command.invoice_type,
                status=InvoiceStatus.DRAFT,
                subtotal=totals.subtotal,
                tax_total=totals.tax_total,
                amount_total=totals.amount_total,
                invoice_date=invoice_date,
                due_date=due_date,
                qr_reference=qr_reference,
                iban_used=account,
                notes=command.notes,
                payment_link=command.payment_link,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            for item in line_items:
                item.invoice_id = created_invoice.id
            created_items = await self.line_item_repo.create_many(line_items)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created invoice {created_invoice.invoice_number} for org {command.org_id}: "
                f"{currency} {totals.amount_total}"
            )

            # Step 6: Build response
            return Return.ok(InvoiceResponseDTO.from_entity(created_invoice, created_items))

        except Exception as e:
            logger.exception(f"Failed to create invoice for org {command.org_id}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

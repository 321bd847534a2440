"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from invoicing.domain.invoice import Invoice, InvoiceType
from invoicing.domain.invoice_line_item import InvoiceLineItem


class LineItemCommandDTO(BaseModel):
    """One position of a new invoice"""

    description: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Line item description"
    )

    quantity: Decimal = Field(
        ...,
        gt=0,
        description="Quantity (must be > 0)"
    )

    unit_price: Decimal = Field(
        ...,
        ge=0,
        description="Price per unit (must be >= 0)"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate in percent; tenant default when omitted"
    )


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case.
    """

    org_id: str = Field(..., description="Issuing organization (tenant) ID")
    contact_id: str = Field(..., description="Billed contact ID")

    currency: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="Currency code (ISO 4217); tenant default when omitted"
    )

    invoice_type: InvoiceType = Field(
        default=InvoiceType.SWISS_QR,
        description="swiss_qr (payment slip) or eu_sepa (bank details)"
    )

    invoice_date: Optional[date] = Field(default=None, description="Issue date, today when omitted")
    due_date: Optional[date] = Field(default=None, description="Due date, from payment terms when omitted")
    notes: Optional[str] = Field(default=None, description="Free-text notes")
    payment_link: Optional[str] = Field(default=None, description="Online payment URL")

    line_items: List[LineItemCommandDTO] = Field(
        default_factory=list,
        description="Invoice positions in display order"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "org_id": "3f1c0d7a-52c4-4c1b-8f0e-8d2a7b6c5e41",
                "contact_id": "c0a8e1d2-6b4f-4e3a-9c1d-2e5f7a8b9c0d",
                "currency": "CHF",
                "invoice_type": "swiss_qr",
                "line_items": [
                    {"description": "Consulting", "quantity": "10", "unit_price": "150.00", "tax_rate": "8.1"}
                ]
            }
        }


class InvoiceLineItemDTO(BaseModel):
    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    line_total: Decimal
    sort_order: int

    @classmethod
    def from_entity(cls, item: InvoiceLineItem) -> "InvoiceLineItemDTO":
        return cls(
            id=item.id,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            tax_rate=item.tax_rate,
            line_total=item.line_total,
            sort_order=item.sort_order,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, GetInvoice and ChangeInvoiceStatus.
    """

    invoice_id: str = Field(..., description="Invoice ID")
    org_id: str = Field(..., description="Organization ID")
    contact_id: Optional[str] = Field(default=None, description="Billed contact ID")
    invoice_number: str = Field(..., description="Invoice number")
    status: str = Field(..., description="Invoice status")
    invoice_type: str = Field(..., description="Invoice layout")
    currency: str = Field(..., description="Currency code")
    subtotal: Decimal = Field(..., description="Net total")
    tax_total: Decimal = Field(..., description="Tax total")
    amount_total: Decimal = Field(..., description="Grand total")
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    paid_at: Optional[datetime] = None
    qr_reference: Optional[str] = None
    iban_used: Optional[str] = None
    notes: Optional[str] = None
    payment_link: Optional[str] = None
    line_items: List[InvoiceLineItemDTO] = Field(default_factory=list)
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "9b2f4c1e-7d1a-4a43-9a55-1f0c2b1e8d70",
                "org_id": "3f1c0d7a-52c4-4c1b-8f0e-8d2a7b6c5e41",
                "invoice_number": "INV-2026-0001",
                "status": "draft",
                "invoice_type": "swiss_qr",
                "currency": "CHF",
                "subtotal": "1500.00",
                "tax_total": "121.50",
                "amount_total": "1621.50",
                "created_at": "2026-01-15T09:30:00Z"
            }
        }

    @classmethod
    def from_entity(
        cls, invoice: Invoice, line_items: Optional[List[InvoiceLineItem]] = None
    ) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            org_id=invoice.org_id,
            contact_id=invoice.contact_id,
            invoice_number=invoice.invoice_number,
            status=_enum_value(invoice.status),
            invoice_type=_enum_value(invoice.invoice_type),
            currency=invoice.currency,
            subtotal=invoice.subtotal,
            tax_total=invoice.tax_total,
            amount_total=invoice.amount_total,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            paid_at=invoice.paid_at,
            qr_reference=invoice.qr_reference,
            iban_used=invoice.iban_used,
            notes=invoice.notes,
            payment_link=invoice.payment_link,
            line_items=[
                InvoiceLineItemDTO.from_entity(item)
                for item in sorted(line_items or [], key=lambda item: item.sort_order)
            ],
            created_at=invoice.created_at,
        )


def _enum_value(value) -> str:
    """Enum members and raw strings read back from the database alike"""
    return getattr(value, "value", value)


class InvoicePdfDTO(BaseModel):
    """Rendered invoice returned by GenerateInvoicePdf"""

    invoice_number: str
    filename: str
    content: bytes


class OverdueRunResultDTO(BaseModel):
    """Outcome of one MarkOverdueInvoices run"""

    checked_count: int = Field(..., description="Sent invoices past their due date")
    marked_count: int = Field(..., description="Invoices moved to overdue")
    notified_count: int = Field(..., description="Notifications delivered")
    invoice_numbers: List[str] = Field(default_factory=list)
    run_at: datetime

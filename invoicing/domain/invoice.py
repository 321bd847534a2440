"""Invoice Domain Entity

Tracks customer invoices, their totals and payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Date, DateTime, Text, UniqueConstraint
from invoicing.domain.base import BaseModel, generate_uuid, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceType(str, Enum):
    """Invoice layout types"""
    SWISS_QR = "swiss_qr"  # Domestic invoice with QR-bill payment slip
    EU_SEPA = "eu_sepa"  # Cross-border invoice with bank details


STATUS_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.CANCELLED},
    InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED},
    InvoiceStatus.OVERDUE: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}


def can_transition(current: InvoiceStatus, target: InvoiceStatus) -> bool:
    """Check whether an invoice may move from `current` to `target` status"""
    return target in STATUS_TRANSITIONS.get(current, set())


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document issued by a tenant to one of its contacts

    Domain Rules:
    - invoice_number is unique per organization ({prefix}-{year}-{sequence})
    - Status transitions: draft -> sent -> paid, with overdue and cancelled
      as side exits; nothing goes back to draft
    - amount_total == subtotal + tax_total (2 decimals)
    - paid_at is set when the invoice is marked paid
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_org_id', 'org_id'),
        Index('ix_invoices_status', 'status'),
        UniqueConstraint('org_id', 'invoice_number', name='uq_invoices_org_number'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (UUID)"
    )

    org_id: str = Field(
        description="Owning organization (tenant) ID"
    )

    contact_id: Optional[str] = Field(
        default=None,
        description="Billed contact ID"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Unique invoice number (e.g., INV-2026-0001)"
    )

    currency: str = Field(
        default="CHF",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    invoice_type: InvoiceType = Field(
        default=InvoiceType.SWISS_QR,
        description="Invoice layout (swiss_qr, eu_sepa)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid, overdue, cancelled)"
    )

    subtotal: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of line totals before tax"
    )

    tax_total: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of line taxes"
    )

    amount_total: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Grand total (subtotal + tax_total)"
    )

    invoice_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Issue date printed on the invoice"
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Timestamp when invoice was paid"
    )

    qr_reference: Optional[str] = Field(
        default=None,
        description="Structured payment reference (QRR or SCOR)"
    )

    iban_used: Optional[str] = Field(
        default=None,
        description="Creditor account at the time of issuing"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text notes printed on the invoice"
    )

    payment_link: Optional[str] = Field(
        default=None,
        description="Externally issued online payment URL"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "9b2f4c1e-7d1a-4a43-9a55-1f0c2b1e8d70",
                "org_id": "3f1c0d7a-52c4-4c1b-8f0e-8d2a7b6c5e41",
                "contact_id": "c0a8e1d2-6b4f-4e3a-9c1d-2e5f7a8b9c0d",
                "invoice_number": "INV-2026-0001",
                "currency": "CHF",
                "invoice_type": "swiss_qr",
                "status": "draft",
                "subtotal": "1500.00",
                "tax_total": "121.50",
                "amount_total": "1621.50",
                "invoice_date": "2026-01-15",
                "due_date": "2026-02-14",
                "qr_reference": "RF16INV20260001",
                "created_at": "2026-01-15T09:30:00Z",
            }
        }

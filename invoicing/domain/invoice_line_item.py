"""Invoice Line Item Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Numeric, String
from invoicing.domain.base import BaseModel, generate_uuid, utc_now

CENT = Decimal("0.01")


class InvoiceLineItem(BaseModel, table=True):
    """
    Invoice Line Item - Individual position within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - quantity is positive, unit_price is non-negative, tax_rate is 0-100
    - line_total = quantity * unit_price (rounded for display only)
    - Immutable once invoice is sent
    """

    __tablename__ = "invoice_line_items"
    __table_args__ = (
        Index('ix_invoice_line_items_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique line item identifier (UUID)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Consulting')"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(12, 4), nullable=False),
        description="Quantity (e.g., hours, units)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit in currency minor-unit precision"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Tax rate in percent (0-100)"
    )

    sort_order: int = Field(
        default=0,
        description="Position of the line on the invoice"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Line item creation timestamp"
    )

    @property
    def line_total(self) -> Decimal:
        """Net amount of the line, rounded to cents"""
        return (Decimal(self.quantity) * Decimal(self.unit_price)).quantize(
            CENT, rounding=ROUND_HALF_UP
        )

    @property
    def tax_amount(self) -> Decimal:
        """Tax amount of the line, rounded to cents"""
        return (
            Decimal(self.quantity) * Decimal(self.unit_price) * Decimal(self.tax_rate) / 100
        ).quantize(CENT, rounding=ROUND_HALF_UP)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "5e7c9a1b-3d2f-4b8e-a6c4-0f1e2d3c4b5a",
                "invoice_id": "9b2f4c1e-7d1a-4a43-9a55-1f0c2b1e8d70",
                "description": "Consulting",
                "quantity": "10.0000",
                "unit_price": "150.00",
                "tax_rate": "8.10",
                "sort_order": 0,
                "created_at": "2026-01-15T09:30:00Z"
            }
        }

"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from invoicing.domain.invoice import InvoiceType


class LineItemRequestSchema(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    quantity: Decimal = Field(..., gt=0, description="Quantity (must be > 0)")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit (must be >= 0)")
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100, description="Tax rate in percent")

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Description must not be blank")
        return v


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    org_id: str = Field(..., min_length=1, description="Issuing organization ID")
    contact_id: str = Field(..., min_length=1, description="Billed contact ID")
    currency: Optional[str] = Field(default=None, description="ISO 4217 code, tenant default when omitted")
    invoice_type: InvoiceType = Field(default=InvoiceType.SWISS_QR)
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    payment_link: Optional[str] = Field(default=None, max_length=500)
    line_items: List[LineItemRequestSchema] = Field(default_factory=list)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        if v is None:
            return v
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a three-letter ISO 4217 code")
        return v

    @model_validator(mode="after")
    def due_after_invoice_date(self):
        if self.invoice_date and self.due_date and self.due_date < self.invoice_date:
            raise ValueError("due_date must not be before invoice_date")
        return self

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

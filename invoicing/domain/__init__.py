from .base import BaseModel, generate_uuid
from .organization import Organization
from .contact import Contact
from .invoice import Invoice, InvoiceStatus, InvoiceType, can_transition
from .invoice_line_item import InvoiceLineItem
from .billing_settings import BillingSettings
from .payment_slip import PaymentSlipError, PaymentSlipPayload, build_payment_slip
from .invoice_document import InvoiceDocument, build_invoice_document

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Organization",
    "Contact",
    "Invoice",
    "InvoiceStatus",
    "InvoiceType",
    "can_transition",
    "InvoiceLineItem",
    "BillingSettings",
    "PaymentSlipError",
    "PaymentSlipPayload",
    "build_payment_slip",
    "InvoiceDocument",
    "build_invoice_document",
]

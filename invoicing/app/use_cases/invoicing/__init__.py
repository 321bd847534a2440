"""Invoicing use cases"""
from .create_invoice import CreateInvoice, payment_reference
from .get_invoice import GetInvoice
from .change_invoice_status import ChangeInvoiceStatus
from .generate_invoice_pdf import GenerateInvoicePdf
from .mark_overdue_invoices import MarkOverdueInvoices
from .dtos import (
    LineItemCommandDTO,
    CreateInvoiceCommandDTO,
    InvoiceLineItemDTO,
    InvoiceResponseDTO,
    InvoicePdfDTO,
    OverdueRunResultDTO,
)

__all__ = [
    "CreateInvoice",
    "payment_reference",
    "GetInvoice",
    "ChangeInvoiceStatus",
    "GenerateInvoicePdf",
    "MarkOverdueInvoices",
    "LineItemCommandDTO",
    "CreateInvoiceCommandDTO",
    "InvoiceLineItemDTO",
    "InvoiceResponseDTO",
    "InvoicePdfDTO",
    "OverdueRunResultDTO",
]

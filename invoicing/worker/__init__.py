"""Background workers for the invoicing service"""
from .overdue_invoices import OverdueInvoiceWorker

__all__ = ["OverdueInvoiceWorker"]

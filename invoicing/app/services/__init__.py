from .unit_of_work import UnitOfWork
from .pdf_service import InvoicePdfService
from .qr_code_service import QrCodeService
from .notification_service import NotificationService

__all__ = [
    "UnitOfWork",
    "InvoicePdfService",
    "QrCodeService",
    "NotificationService",
]

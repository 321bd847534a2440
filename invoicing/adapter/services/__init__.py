from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabInvoicePdfService
from .qr_code_service import QrCodeGenerator
from .notification_service import (
    LoggingNotificationService,
    WebhookNotificationService,
    CompositeNotificationService,
    create_notification_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabInvoicePdfService",
    "QrCodeGenerator",
    "LoggingNotificationService",
    "WebhookNotificationService",
    "CompositeNotificationService",
    "create_notification_service",
]

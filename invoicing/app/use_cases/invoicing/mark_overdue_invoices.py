"""MarkOverdueInvoices Use Case

Moves sent invoices past their due date to overdue and notifies about them.
"""

import logging
import time
from datetime import date
from typing import Optional
from invoicing.libs.result import Result, Return, Error
from invoicing.app.services.unit_of_work import UnitOfWork
from invoicing.app.services.notification_service import NotificationService
from invoicing.app.repositories.invoice_repository import InvoiceRepository
from invoicing.domain.base import utc_now
from invoicing.domain.invoice import InvoiceStatus
from .dtos import OverdueRunResultDTO

logger = logging.getLogger(__name__)


class MarkOverdueInvoices:
    """
    Use Case: Mark overdue invoices

    Business Rules:
    1. Only sent invoices with a due date before today become overdue
    2. Status changes are committed before notifications go out
    3. A failed notification never reverts the status change

    Flow:
    1. Get overdue candidates
    2. Move each to overdue
    3. Commit transaction
    4. Notify per invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        notification_service: Optional[NotificationService] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.notification_service = notification_service

    async def execute(self, today: Optional[date] = None) -> Result[OverdueRunResultDTO]:
        """
        Execute overdue check

        Args:
            today: Reference date, defaults to the current date

        Returns:
            Result[OverdueRunResultDTO]: Counts of checked, marked and notified invoices
        """
        start_time = time.time()
        run_at = utc_now()
        today = today or date.today()

        try:
            logger.info(f"Checking for invoices overdue as of {today.isoformat()}")

            # Step 1: Candidates
            candidates = await self.invoice_repo.get_overdue_candidates(today)

            # Step 2: Status change
            marked = []
            for invoice in candidates:
                if invoice.status != InvoiceStatus.SENT:
                    continue
                invoice.status = InvoiceStatus.OVERDUE
                marked.append(await self.invoice_repo.update(invoice))

            # Step 3: Commit
            await self.uow.commit()

            # Step 4: Notify
            notified = 0
            if self.notification_service:
                for invoice in marked:
                    try:
                        if await self.notification_service.send_overdue_notice(invoice):
                            notified += 1
                    except Exception as e:
                        logger.error(
                            f"Overdue notice for invoice {invoice.invoice_number} failed: {e}"
                        )

            duration = time.time() - start_time
            logger.info(
                f"Overdue check completed in {duration:.2f}s: "
                f"{len(candidates)} checked, {len(marked)} marked, {notified} notified"
            )

            return Return.ok(
                OverdueRunResultDTO(
                    checked_count=len(candidates),
                    marked_count=len(marked),
                    notified_count=notified,
                    invoice_numbers=[invoice.invoice_number for invoice in marked],
                    run_at=run_at,
                )
            )

        except Exception as e:
            logger.error(f"Overdue check failed: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_OVERDUE_FAILED",
                    message="Failed to mark overdue invoices",
                    reason=str(e),
                )
            )

"""Overdue Invoice Background Worker

Periodically moves sent invoices past their due date to overdue and sends
notices about them. Can be run as a standalone script or integrated with a
scheduler.
"""

import asyncio
import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from invoicing.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from invoicing.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicing.adapter.services.notification_service import create_notification_service
from invoicing.app.use_cases.invoicing import MarkOverdueInvoices, OverdueRunResultDTO
from invoicing.domain.base import utc_now

logger = logging.getLogger(__name__)


class OverdueInvoiceWorker:
    """
    Background worker for overdue invoices

    Usage:
        # Run once
        worker = OverdueInvoiceWorker()
        result = await worker.run_once()

        # Run continuously
        worker = OverdueInvoiceWorker()
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        webhook_url: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            webhook_url: Notification webhook URL (defaults to config)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.webhook_url = webhook_url or ApplicationConfig.OVERDUE_NOTIFICATION_WEBHOOK

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        self.notification_service = create_notification_service(self.webhook_url)

        logger.info("OverdueInvoiceWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> OverdueRunResultDTO:
        """
        Run the overdue check once

        Args:
            today: Reference date (default: current date)

        Returns:
            OverdueRunResultDTO with counts of the run

        Raises:
            RuntimeError: If the check failed
        """
        if not ApplicationConfig.OVERDUE_CHECK_ENABLED:
            logger.info("Overdue check is disabled, skipping")
            return OverdueRunResultDTO(
                checked_count=0,
                marked_count=0,
                notified_count=0,
                run_at=utc_now(),
            )

        async with self.async_session_factory() as session:
            use_case = MarkOverdueInvoices(
                uow=SqlAlchemyUnitOfWork(session),
                invoice_repo=SqlAlchemyInvoiceRepository(session),
                notification_service=self.notification_service,
            )

            result = await use_case.execute(today=today)

            if result.is_err():
                logger.error(f"Overdue check failed: {result.error.message}")
                raise RuntimeError(f"Overdue check failed: {result.error.reason}")

            return result.value

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run the overdue check continuously

        Args:
            interval_seconds: Seconds between runs (default: 24 hours)
        """
        logger.info(f"Starting continuous overdue check with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Overdue cycle complete. Marked {result.marked_count} of "
                    f"{result.checked_count} invoices, notified {result.notified_count}"
                )
            except Exception as e:
                logger.error(f"Overdue cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m invoicing.worker.overdue_invoices --once

        # Run continuously with custom interval (in seconds)
        python -m invoicing.worker.overdue_invoices --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.OVERDUE_CHECK_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: from config)"
    )
    args = parser.parse_args()

    worker = OverdueInvoiceWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Overdue check complete:")
            print(f"  Invoices checked: {result.checked_count}")
            print(f"  Marked overdue: {result.marked_count}")
            print(f"  Notices sent: {result.notified_count}")
            for number in result.invoice_numbers:
                print(f"  - {number}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())

"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from invoicing.app.repositories.invoice_repository import InvoiceRepository
from invoicing.domain.base import utc_now
from invoicing.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_org_id(
        self,
        org_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        statement = select(Invoice).where(Invoice.org_id == org_id)

        if status:
            statement = statement.where(Invoice.status == status)

        statement = statement.order_by(Invoice.created_at.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def generate_invoice_number(self, org_id: str, prefix: str, year: int) -> str:
        """
        Next number after the tenant's highest number of the year

        Sequences are zero-padded to four digits and grow wider past 9999,
        so the longest suffix, then the highest, is the latest number.
        """
        number_prefix = f"{prefix}-{year}-"

        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.org_id == org_id)
            .where(Invoice.invoice_number.startswith(number_prefix, autoescape=True))
            .order_by(func.length(Invoice.invoice_number).desc(), Invoice.invoice_number.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number:
            sequence = int(max_number[len(number_prefix):]) + 1
        else:
            sequence = 1

        return f"{number_prefix}{sequence:04d}"

    async def get_overdue_candidates(self, today: date) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.status == InvoiceStatus.SENT)
            .where(Invoice.due_date < today)
            .order_by(Invoice.due_date)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

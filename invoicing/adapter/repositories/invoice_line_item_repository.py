"""SQLAlchemy Invoice Line Item Repository Implementation

Implements line item persistence using SQLAlchemy async session.
"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from invoicing.app.repositories.invoice_line_item_repository import InvoiceLineItemRepository
from invoicing.domain.invoice_line_item import InvoiceLineItem


class SqlAlchemyInvoiceLineItemRepository(InvoiceLineItemRepository):
    """
    SQLAlchemy implementation of InvoiceLineItemRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        statement = (
            select(InvoiceLineItem)
            .where(InvoiceLineItem.invoice_id == invoice_id)
            .order_by(InvoiceLineItem.sort_order)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        self.session.add_all(line_items)
        await self.session.flush()
        for item in line_items:
            await self.session.refresh(item)
        return line_items

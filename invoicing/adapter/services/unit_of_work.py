from sqlmodel.ext.asyncio.session import AsyncSession
from invoicing.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """UnitOfWork bound to one async session; leaving the block rolls back anything uncommitted"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

"""SQLAlchemy Contact Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from invoicing.app.repositories.contact_repository import ContactRepository
from invoicing.domain.contact import Contact


class SqlAlchemyContactRepository(ContactRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, contact: Contact) -> Contact:
        self.session.add(contact)
        await self.session.flush()
        await self.session.refresh(contact)
        return contact

    async def get_by_id(self, contact_id: str, org_id: Optional[str] = None) -> Optional[Contact]:
        statement = select(Contact).where(Contact.id == contact_id)
        if org_id:
            statement = statement.where(Contact.org_id == org_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

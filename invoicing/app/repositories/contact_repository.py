"""Contact Repository Interface

Contacts are owned by the CRM side; invoicing only reads them.
"""

from abc import ABC, abstractmethod
from typing import Optional
from invoicing.domain.contact import Contact


class ContactRepository(ABC):
    """Repository interface for Contact lookups"""

    @abstractmethod
    async def create(self, contact: Contact) -> Contact:
        pass

    @abstractmethod
    async def get_by_id(self, contact_id: str, org_id: Optional[str] = None) -> Optional[Contact]:
        """
        Retrieve contact by ID

        Args:
            contact_id: Contact ID
            org_id: When given, only a contact of this tenant is returned

        Returns:
            Contact if found, None otherwise
        """
        pass

"""Organization Repository Interface

Defines the contract for tenant lookups.
"""

from abc import ABC, abstractmethod
from typing import Optional
from invoicing.domain.organization import Organization


class OrganizationRepository(ABC):
    """Repository interface for Organization persistence"""

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        pass

    @abstractmethod
    async def get_by_id(self, org_id: str) -> Optional[Organization]:
        """
        Retrieve organization by ID

        Args:
            org_id: Organization ID

        Returns:
            Organization if found, None otherwise
        """
        pass

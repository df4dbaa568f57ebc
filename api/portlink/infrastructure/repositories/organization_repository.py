"""
Repositorio de organizaciones (tenants).
"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import OrganizationModel


class OrganizationRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, organization_id: str) -> Optional[OrganizationModel]:
        return await self.db.get(OrganizationModel, organization_id)

    async def authorized_priorities(self, organization_id: str) -> Optional[List[str]]:
        """Prioridades habilitadas; None si la organizacion no tiene restriccion."""
        organization = await self.get_by_id(organization_id)
        if organization is None or not organization.authorized_priorities:
            return None
        return list(organization.authorized_priorities)

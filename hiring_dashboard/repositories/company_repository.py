"""
Company repository - database operations for Company.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.company import Company


class CompanyRepository:
    """Repository for Company database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, company_id: UUID) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Company]:
        """All companies, alphabetical."""
        result = await self.db.execute(select(Company).order_by(Company.name.asc()))
        return list(result.scalars().all())

    async def list_by_ids(self, company_ids: List[UUID]) -> List[Company]:
        """Companies with the given ids, alphabetical."""
        if not company_ids:
            return []
        result = await self.db.execute(
            select(Company)
            .where(Company.id.in_(company_ids))
            .order_by(Company.name.asc())
        )
        return list(result.scalars().all())

    async def create(self, name: str, settings: Optional[Dict[str, Any]] = None) -> Company:
        company = Company(name=name, settings=settings or {})
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def update(self, company: Company, data: Dict[str, Any]) -> Company:
        for field, value in data.items():
            setattr(company, field, value)
        await self.db.flush()
        await self.db.refresh(company)
        return company

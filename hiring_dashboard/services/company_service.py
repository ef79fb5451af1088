"""
Company settings service.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_admin
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import NotFoundError, ValidationError
from hiring_dashboard.models.company import COMPANY_NAME_MAX_LENGTH, Company
from hiring_dashboard.repositories.company_repository import CompanyRepository

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for reading and editing the selected company."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CompanyRepository(db)

    async def get_company(self, ctx: SessionContext) -> Company:
        company = await self.repo.get_by_id(ctx.scope())
        if not company:
            raise NotFoundError("Company not found")
        return company

    async def update_company(
        self,
        ctx: SessionContext,
        name: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> Company:
        """Rename the company or replace its settings bag. Admin only."""
        company_id = require_company_admin(ctx, action="change company settings")
        company = await self.repo.get_by_id(company_id)
        if not company:
            raise NotFoundError("Company not found")

        data: Dict[str, Any] = {}
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Company name is required")
            if len(name) > COMPANY_NAME_MAX_LENGTH:
                raise ValidationError(f"Company name must be at most {COMPANY_NAME_MAX_LENGTH} characters")
            if name != company.name:
                existing = await self.repo.get_by_name(name)
                if existing and existing.id != company.id:
                    raise ValidationError("Company name already exists")
            data["name"] = name
        if settings is not None:
            data["settings"] = dict(settings)

        if not data:
            return company

        async with atomic(self.db, "update company"):
            company = await self.repo.update(company, data)
        logger.info("Company %s updated by %s", company_id, ctx.user_id)
        return company

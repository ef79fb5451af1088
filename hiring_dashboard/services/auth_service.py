"""
Authentication service.

Handles sign-up (user + company + admin membership in one transaction)
and credential checks.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.security import hash_password, verify_password
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import ValidationError
from hiring_dashboard.models.company import COMPANY_NAME_MAX_LENGTH, Company
from hiring_dashboard.models.team_member import TeamRoles
from hiring_dashboard.models.user import User
from hiring_dashboard.repositories.company_repository import CompanyRepository
from hiring_dashboard.repositories.team_member_repository import TeamMemberRepository
from hiring_dashboard.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.company_repo = CompanyRepository(db)
        self.member_repo = TeamMemberRepository(db)

    async def sign_up(self, email: str, password: str, company_name: str) -> Tuple[User, Company]:
        """
        Register a user together with a new company they administer.

        Args:
            email: Login email, stored lower-cased
            password: Plain password, at least 6 characters
            company_name: Name of the company to create

        Returns:
            The created user and company

        Raises:
            ValidationError: missing fields, short password, or the email
                or company name is already taken
        """
        company_name = (company_name or "").strip()
        email = (email or "").strip().lower()

        if not company_name:
            raise ValidationError("Company name is required")
        if len(company_name) > COMPANY_NAME_MAX_LENGTH:
            raise ValidationError(f"Company name must be at most {COMPANY_NAME_MAX_LENGTH} characters")
        if not email:
            raise ValidationError("Email is required")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if await self.user_repo.get_by_email(email):
            raise ValidationError("Email is already registered")
        if await self.company_repo.get_by_name(company_name):
            raise ValidationError("Company name already exists")

        async with atomic(self.db, "register account"):
            user = await self.user_repo.create(email, hash_password(password))
            company = await self.company_repo.create(company_name)
            await self.member_repo.create(company.id, user.id, TeamRoles.ADMIN)

        logger.info("Registered user %s with company %s", user.id, company.id)
        return user, company

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check credentials.

        Returns:
            The user if email and password match an active account, None otherwise
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    async def get_user(self, user_id) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)

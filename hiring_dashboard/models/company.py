"""
Company model.

A Company is the tenant boundary: every other business row belongs to
exactly one company.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.db.base import Base
from hiring_dashboard.utils.time import utc_now

COMPANY_NAME_MAX_LENGTH = 255


class Company(Base):
    """
    Company table - the root of tenancy.

    Note: Company doesn't inherit from CompanyScopedModel because
    the company row itself doesn't belong to a company.
    """

    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(COMPANY_NAME_MAX_LENGTH),
        nullable=False,
        unique=True,
    )

    # Opaque key-value bag edited from the settings screen
    settings: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )

    subscription_status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="trial",
    )

    subscription_ends_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
    )

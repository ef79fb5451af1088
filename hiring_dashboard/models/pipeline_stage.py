"""
PipelineStage model.

Represents a stage in a company's hiring pipeline (e.g., Applied, Screening, Offer).
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import CompanyScopedModel


class PipelineStage(CompanyScopedModel):
    """
    PipelineStage table - represents a step in the hiring process.

    Each company customizes its own stages.
    The order_index determines the left-to-right display order and which
    stage new candidates start in.
    """

    __tablename__ = "pipeline_stages"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    order_index: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    __table_args__ = (
        Index("ix_pipeline_stages_company_order", "company_id", "order_index"),
    )

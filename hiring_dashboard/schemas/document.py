"""
Document Pydantic schemas.
"""

from uuid import UUID

from hiring_dashboard.schemas.base import AppendOnlyRead


class DocumentRead(AppendOnlyRead):
    """Document metadata. The blob itself is served by the download endpoint."""

    candidate_id: UUID
    name: str
    mime_type: str
    storage_path: str
    size_bytes: int
    created_by: UUID

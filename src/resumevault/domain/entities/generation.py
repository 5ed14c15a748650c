"""Generation job entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from resumevault.domain.value_objects import GenerationStatus, SectionMap


@dataclass
class Generation:
    """PDF generation job consumed by the external worker."""

    id: UUID
    resume_id: UUID
    version_number: int
    status: GenerationStatus
    output_filename: str
    meta_code: str
    resume_data: SectionMap | None
    created_at: datetime
    updated_at: datetime
    pdf_path: str | None = None
    drive_link: str | None = None
    error_log: str | None = None

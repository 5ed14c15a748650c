"""Generation DTOs."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class GenerationCreateInput:
    """Input for queueing a PDF generation job."""

    resume_id: UUID
    version_number: int | None = None

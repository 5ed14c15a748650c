"""Resume version entities."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from resumevault.domain.value_objects import ChangeType, SectionMap


@dataclass(frozen=True)
class ResumeVersion:
    """Immutable snapshot of a resume. (resume_id, version_number) is unique."""

    resume_id: UUID
    version_number: int
    data: SectionMap
    changed_sections: tuple[str, ...]
    change_summary: str
    change_type: ChangeType
    created_at: datetime


@dataclass(frozen=True)
class ResumeVersionSummary:
    """Version listing projection - everything except the snapshot data."""

    resume_id: UUID
    version_number: int
    changed_sections: tuple[str, ...]
    change_summary: str
    change_type: ChangeType
    created_at: datetime

"""Resume DTOs."""

from dataclasses import dataclass
from uuid import UUID

from resumevault.domain.entities import Resume
from resumevault.domain.value_objects import SectionMap


@dataclass
class ResumeCreateInput:
    """Input for creating a resume from a full payload."""

    data: SectionMap
    meta_code: str | None = None
    title: str | None = None


@dataclass
class ReplaceResult:
    """Outcome of a full replace. ``applied`` is False when nothing changed."""

    applied: bool
    resume: Resume
    new_version: int | None = None
    changed_sections: tuple[str, ...] = ()

    @property
    def no_change(self) -> bool:
        return not self.applied


@dataclass
class PartialUpdateResult:
    """Outcome of a section merge. Never creates a version."""

    applied: bool
    resume: Resume


@dataclass
class IngestResult:
    """Outcome of an upload keyed by meta_code."""

    resume_id: UUID
    version_number: int
    created: bool
    applied: bool
    resume: Resume


@dataclass
class RollbackResult:
    """Outcome of a rollback: the new forward version restoring the target."""

    new_version: int
    target_version: int
    changed_sections: tuple[str, ...]
    resume: Resume

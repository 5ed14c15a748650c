"""Resume version repository port (append-only version log)."""

from typing import Protocol
from uuid import UUID

from resumevault.domain.entities import ResumeVersion, ResumeVersionSummary


class ResumeVersionRepository(Protocol):
    """Port for the immutable version log."""

    async def append(self, version: ResumeVersion) -> ResumeVersion:
        """Insert a version. Raises VersionConflict if the number is taken."""
        ...

    async def get(self, resume_id: UUID, version_number: int) -> ResumeVersion | None: ...

    async def list(self, resume_id: UUID) -> list[ResumeVersionSummary]:
        """Versions newest first, without snapshot data."""
        ...

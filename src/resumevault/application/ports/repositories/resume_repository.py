"""Resume repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from resumevault.domain.entities import Resume
from resumevault.domain.value_objects import SectionMap


class ResumeRepository(Protocol):
    """Port for persistence of the live resume projection."""

    async def get_by_id(self, resume_id: UUID) -> Resume | None: ...

    async def get_by_meta_code(self, meta_code: str) -> Resume | None: ...

    async def list(
        self,
        *,
        meta_code: str | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Resume], str | None]: ...

    async def create(self, resume: Resume) -> Resume: ...

    async def advance_version(
        self,
        resume_id: UUID,
        *,
        expected_version: int,
        data: SectionMap,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume:
        """Set data and bump current_version if it still equals expected_version.

        Raises VersionConflict when another writer advanced it first.
        """
        ...

    async def update_details(
        self,
        resume_id: UUID,
        *,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume | None: ...

    async def merge_sections(
        self,
        resume_id: UUID,
        patches: SectionMap,
        *,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume | None:
        """Replace the named top-level sections in one atomic write."""
        ...

    async def delete(self, resume_id: UUID) -> None: ...

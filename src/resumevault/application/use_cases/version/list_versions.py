"""List versions use case."""

from uuid import UUID

from resumevault.domain.entities import ResumeVersionSummary
from resumevault.domain.exceptions import NotFound


class ListVersionsUseCase:
    """Version history of a resume, newest first, without snapshot data."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resume_id: UUID) -> list[ResumeVersionSummary]:
        async with self._uow_factory() as uow:
            resume = await uow.resumes.get_by_id(resume_id)
            if not resume:
                raise NotFound("Resume", str(resume_id))
            return await uow.versions.list(resume_id)

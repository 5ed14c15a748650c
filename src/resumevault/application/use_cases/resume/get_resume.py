"""Get resume use case."""

from uuid import UUID

from resumevault.domain.entities import Resume
from resumevault.domain.exceptions import NotFound


class GetResumeUseCase:
    """Get the live resume projection by id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resume_id: UUID) -> Resume:
        async with self._uow_factory() as uow:
            resume = await uow.resumes.get_by_id(resume_id)
        if not resume:
            raise NotFound("Resume", str(resume_id))
        return resume

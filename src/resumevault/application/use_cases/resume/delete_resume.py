"""Delete resume use case."""

import logging
from uuid import UUID

from resumevault.domain.entities import Resume
from resumevault.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class DeleteResumeUseCase:
    """Delete a resume together with its versions and generation jobs."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resume_id: UUID) -> Resume:
        """Delete resume; versions and jobs go with it (cascade)."""
        async with self._uow_factory() as uow:
            resume = await uow.resumes.get_by_id(resume_id)
            if not resume:
                raise NotFound("Resume", str(resume_id))
            await uow.resumes.delete(resume_id)
        logger.info("Deleted resume %s (%s)", resume_id, resume.title)
        return resume

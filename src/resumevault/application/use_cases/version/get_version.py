"""Get version use case."""

from uuid import UUID

from resumevault.domain.entities import ResumeVersion
from resumevault.domain.exceptions import NotFound


class GetVersionUseCase:
    """Fetch one version including its full snapshot data."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resume_id: UUID, version_number: int) -> ResumeVersion:
        async with self._uow_factory() as uow:
            version = await uow.versions.get(resume_id, version_number)
        if not version:
            raise NotFound("Version", f"{resume_id} v{version_number}")
        return version

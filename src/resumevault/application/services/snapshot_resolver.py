"""Snapshot resolver - exact data for a (resume, version) pair."""

import copy
import logging
from uuid import UUID

from resumevault.domain.exceptions import NotFound
from resumevault.domain.value_objects import SectionMap

logger = logging.getLogger(__name__)


class SnapshotResolver:
    """Read-only access to immutable snapshots for the generation worker."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def resolve(self, resume_id: UUID, version_number: int) -> SectionMap:
        """Return a private copy of the snapshot data.

        The version row is authoritative. The live resume data is used only
        when the row for the current version cannot be read.
        """
        async with self._uow_factory() as uow:
            version = await uow.versions.get(resume_id, version_number)
            if version:
                return copy.deepcopy(version.data)

            resume = await uow.resumes.get_by_id(resume_id)
            if not resume:
                raise NotFound("Resume", str(resume_id))
            if resume.current_version != version_number:
                raise NotFound("Version", f"{resume_id} v{version_number}")

        logger.warning(
            "Version row v%d missing for resume %s, using live data",
            version_number,
            resume_id,
        )
        return copy.deepcopy(resume.data)

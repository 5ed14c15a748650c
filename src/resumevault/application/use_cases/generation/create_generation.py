"""Create generation job use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from resumevault.application.dto.generation_dto import GenerationCreateInput
from resumevault.application.services.snapshot_resolver import SnapshotResolver
from resumevault.domain.entities import Generation, Resume
from resumevault.domain.exceptions import NotFound, ValidationError
from resumevault.domain.services import generate_output_filename
from resumevault.domain.value_objects import GenerationStatus, SectionMap

logger = logging.getLogger(__name__)


def _full_name(data: SectionMap, resume: Resume) -> str:
    basics = data.get("basics")
    if isinstance(basics, dict) and isinstance(basics.get("name"), dict):
        full = basics["name"].get("full")
        if isinstance(full, str) and full.strip():
            return full
    if resume.title:
        head = resume.title.split("–")[0].strip()
        if head:
            return head
    return "Unknown"


def _meta_code(data: SectionMap, resume: Resume) -> str:
    if resume.meta_code:
        return resume.meta_code
    meta = data.get("meta")
    if isinstance(meta, dict) and isinstance(meta.get("code"), str) and meta["code"]:
        return meta["code"]
    return "RESUME"


class CreateGenerationUseCase:
    """Queue a PDF generation job over an immutable snapshot.

    The job stores its own copy of the snapshot, so no lock is held while the
    external worker renders it.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        snapshot_resolver: SnapshotResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._snapshot_resolver = snapshot_resolver

    async def execute(self, input_data: GenerationCreateInput) -> Generation:
        """Create a PENDING job for the given (or current) version."""
        if input_data.version_number is not None and input_data.version_number < 1:
            raise ValidationError("version_number must be a positive integer")

        async with self._uow_factory() as uow:
            resume = await uow.resumes.get_by_id(input_data.resume_id)
        if not resume:
            raise NotFound("Resume", str(input_data.resume_id))

        version_number = input_data.version_number or resume.current_version
        data = await self._snapshot_resolver.resolve(resume.id, version_number)

        now = datetime.now(UTC)
        meta_code = _meta_code(data, resume)
        generation = Generation(
            id=uuid4(),
            resume_id=resume.id,
            version_number=version_number,
            status=GenerationStatus.PENDING,
            output_filename=generate_output_filename(
                _full_name(data, resume), meta_code, version_number, now
            ),
            meta_code=meta_code,
            resume_data=data,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            await uow.generations.create(generation)

        logger.info(
            "Queued generation %s for resume %s v%d (%s)",
            generation.id,
            resume.id,
            version_number,
            generation.output_filename,
        )
        return generation

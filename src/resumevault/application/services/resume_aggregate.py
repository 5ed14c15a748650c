"""Resume aggregate - every write to a resume goes through here.

A versioned write is one transaction: read the resume, diff, append the next
version, compare-and-swap ``current_version``. Losing a race on either write
raises VersionConflict, the transaction rolls back and the whole attempt is
repeated against fresh state, up to ``max_attempts`` times.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from datetime import UTC, datetime
from typing import TypeVar
from uuid import UUID, uuid4

from resumevault.application.dto.resume_dto import (
    IngestResult,
    PartialUpdateResult,
    ReplaceResult,
    ResumeCreateInput,
)
from resumevault.application.ports import UnitOfWork
from resumevault.domain.entities import Resume, ResumeVersion
from resumevault.domain.exceptions import NotFound, ValidationError, VersionConflict
from resumevault.domain.services import diff_sections, generate_change_summary
from resumevault.domain.value_objects import ChangeType, SectionMap

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SECTIONS = ("meta", "basics", "work", "education", "skills", "projects")


def extract_meta_code(data: Mapping) -> str | None:
    """Return data.meta.code if it is a non-empty string."""
    meta = data.get("meta")
    if isinstance(meta, dict):
        code = meta.get("code")
        if isinstance(code, str) and code.strip():
            return code.strip()
    return None


def default_title(data: Mapping, meta_code: str) -> str:
    """Build "{basics.name.full} – {meta_code}" with a fallback name."""
    name = None
    basics = data.get("basics")
    if isinstance(basics, dict) and isinstance(basics.get("name"), dict):
        name = basics["name"].get("full")
    return f"{name or 'Untitled'} – {meta_code}"


def _require_payload(data: object) -> SectionMap:
    if data is None:
        raise ValidationError("Missing data field")
    if not isinstance(data, dict):
        raise ValidationError("Resume data must be a JSON object")
    return data


class ResumeAggregate:
    """Mediates replace, partial update, ingest and create for resumes."""

    def __init__(
        self,
        unit_of_work_factory: type,
        max_attempts: int = 3,
        allowed_sections: tuple[str, ...] = DEFAULT_SECTIONS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._uow_factory = unit_of_work_factory
        self._max_attempts = max_attempts
        self._allowed_sections = tuple(allowed_sections)

    @property
    def allowed_sections(self) -> tuple[str, ...]:
        return self._allowed_sections

    async def load(self, uow: UnitOfWork, resume_id: UUID) -> Resume:
        """Read the current resume state or raise NotFound."""
        resume = await uow.resumes.get_by_id(resume_id)
        if not resume:
            raise NotFound("Resume", str(resume_id))
        return resume

    async def run_versioned(
        self,
        resume_id: UUID,
        step: Callable[[UnitOfWork], Awaitable[T]],
    ) -> T:
        """Run ``step`` in its own transaction, retrying on VersionConflict."""
        attempt = 0
        while True:
            attempt += 1
            try:
                async with self._uow_factory() as uow:
                    return await step(uow)
            except VersionConflict as e:
                if attempt >= self._max_attempts:
                    logger.error(
                        "Giving up on resume %s after %d conflicting attempts",
                        resume_id,
                        attempt,
                    )
                    raise
                logger.warning(
                    "Version conflict on resume %s at v%d (attempt %d/%d), retrying",
                    resume_id,
                    e.version_number,
                    attempt,
                    self._max_attempts,
                )

    async def append_and_advance(
        self,
        uow: UnitOfWork,
        resume: Resume,
        data: SectionMap,
        changed_sections: list[str],
        change_summary: str,
        change_type: ChangeType,
        *,
        title: str | None = None,
        meta_code: str | None = None,
    ) -> Resume:
        """Append version current+1 and move the current pointer onto it.

        Must run inside the transaction that read ``resume``.
        """
        now = datetime.now(UTC)
        new_version = resume.current_version + 1
        await uow.versions.append(
            ResumeVersion(
                resume_id=resume.id,
                version_number=new_version,
                data=data,
                changed_sections=tuple(changed_sections),
                change_summary=change_summary,
                change_type=change_type,
                created_at=now,
            )
        )
        updated = await uow.resumes.advance_version(
            resume.id,
            expected_version=resume.current_version,
            data=data,
            title=title,
            meta_code=meta_code,
            updated_at=now,
        )
        logger.info(
            "Resume %s advanced to v%d (%s: %s)",
            resume.id,
            new_version,
            change_type.value,
            change_summary,
        )
        return updated

    async def replace(
        self,
        resume_id: UUID,
        data: SectionMap,
        *,
        title: str | None = None,
        meta_code: str | None = None,
    ) -> ReplaceResult:
        """Replace the whole payload; create a version only if a section changed."""
        data = _require_payload(data)

        async def step(uow: UnitOfWork) -> ReplaceResult:
            resume = await self.load(uow, resume_id)
            return await self._replace_loaded(
                uow, resume, data, ChangeType.EDIT, title=title, meta_code=meta_code
            )

        return await self.run_versioned(resume_id, step)

    async def _replace_loaded(
        self,
        uow: UnitOfWork,
        resume: Resume,
        data: SectionMap,
        change_type: ChangeType,
        *,
        title: str | None,
        meta_code: str | None,
    ) -> ReplaceResult:
        changed = diff_sections(resume.data, data)
        if not changed:
            logger.debug("Replace on resume %s changed nothing", resume.id)
            if title or meta_code:
                updated = await uow.resumes.update_details(
                    resume.id,
                    title=title or None,
                    meta_code=meta_code or None,
                    updated_at=datetime.now(UTC),
                )
                resume = updated or resume
            return ReplaceResult(applied=False, resume=resume)

        updated = await self.append_and_advance(
            uow,
            resume,
            data,
            changed,
            generate_change_summary(changed),
            change_type,
            title=title or None,
            meta_code=meta_code or None,
        )
        return ReplaceResult(
            applied=True,
            resume=updated,
            new_version=updated.current_version,
            changed_sections=tuple(changed),
        )

    async def partial_update(
        self,
        resume_id: UUID,
        sections: SectionMap | None = None,
        *,
        title: str | None = None,
    ) -> PartialUpdateResult:
        """Merge whole sections into the live data. Never creates a version.

        Callers that need the change recorded in history must use replace.
        """
        if sections is not None and not isinstance(sections, dict):
            raise ValidationError("sections must be a JSON object")
        if not sections and not title:
            raise ValidationError(
                "Body must contain { section, value } or { sections: {...} } or { title }"
            )
        sections = sections or {}
        invalid = [k for k in sections if k not in self._allowed_sections]
        if invalid:
            raise ValidationError(
                f"Invalid sections: {', '.join(invalid)}. "
                f"Valid: {', '.join(self._allowed_sections)}"
            )
        meta_code = extract_meta_code(sections) if "meta" in sections else None

        async with self._uow_factory() as uow:
            updated = await uow.resumes.merge_sections(
                resume_id,
                sections,
                title=title or None,
                meta_code=meta_code,
                updated_at=datetime.now(UTC),
            )
            if not updated:
                raise NotFound("Resume", str(resume_id))
        return PartialUpdateResult(applied=True, resume=updated)

    async def ingest(self, data: SectionMap, *, title: str | None = None) -> IngestResult:
        """Upload a payload keyed by its meta.code classifier.

        Updates the resume holding that code as an upload-typed replace, or
        creates a new resume at version 1. A resume deleted between the
        lookup and the update counts as absent.
        """
        data = _require_payload(data)
        meta_code = extract_meta_code(data)
        if not meta_code:
            raise ValidationError("Missing meta.code in resume JSON. This field is required.")
        title = title or default_title(data, meta_code)

        async with self._uow_factory() as uow:
            existing = await uow.resumes.get_by_meta_code(meta_code)
        if existing:
            try:
                return await self._ingest_existing(existing.id, data, title, meta_code)
            except NotFound:
                logger.warning(
                    "Resume %s (%s) was deleted during upload, creating a new one",
                    existing.id,
                    meta_code,
                )

        resume = await self._create_with_first_version(
            data, meta_code, title, ChangeType.UPLOAD, "Initial upload"
        )
        return IngestResult(
            resume_id=resume.id,
            version_number=resume.current_version,
            created=True,
            applied=True,
            resume=resume,
        )

    async def _ingest_existing(
        self, resume_id: UUID, data: SectionMap, title: str, meta_code: str
    ) -> IngestResult:
        async def step(uow: UnitOfWork) -> ReplaceResult:
            resume = await self.load(uow, resume_id)
            return await self._replace_loaded(
                uow, resume, data, ChangeType.UPLOAD, title=title, meta_code=meta_code
            )

        result = await self.run_versioned(resume_id, step)
        return IngestResult(
            resume_id=result.resume.id,
            version_number=result.resume.current_version,
            created=False,
            applied=result.applied,
            resume=result.resume,
        )

    async def create(self, input_data: ResumeCreateInput) -> Resume:
        """Create a resume and its first version from a full payload."""
        data = _require_payload(input_data.data)
        meta_code = input_data.meta_code or extract_meta_code(data)
        if not meta_code:
            raise ValidationError(
                "Missing meta_code. Provide it at top-level or inside data.meta.code"
            )
        title = input_data.title or default_title(data, meta_code)
        return await self._create_with_first_version(
            data, meta_code, title, ChangeType.EDIT, "Initial version"
        )

    async def _create_with_first_version(
        self,
        data: SectionMap,
        meta_code: str,
        title: str,
        change_type: ChangeType,
        change_summary: str,
    ) -> Resume:
        now = datetime.now(UTC)
        resume = Resume(
            id=uuid4(),
            meta_code=meta_code,
            title=title,
            data=data,
            current_version=1,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            await uow.resumes.create(resume)
            await uow.versions.append(
                ResumeVersion(
                    resume_id=resume.id,
                    version_number=1,
                    data=data,
                    changed_sections=tuple(diff_sections(None, data)),
                    change_summary=change_summary,
                    change_type=change_type,
                    created_at=now,
                )
            )
        logger.info("Created resume %s (%s) at v1", resume.id, meta_code)
        return resume

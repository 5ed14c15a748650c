"""Rollback - restore a past snapshot as a new forward version."""

import logging
from uuid import UUID

from resumevault.application.dto.resume_dto import RollbackResult
from resumevault.application.ports import UnitOfWork
from resumevault.application.services.resume_aggregate import ResumeAggregate
from resumevault.domain.exceptions import NotFound, ValidationError
from resumevault.domain.services import diff_sections
from resumevault.domain.value_objects import ChangeType

logger = logging.getLogger(__name__)


class RollbackCoordinator:
    """Authors a new current version whose data equals an older one.

    History stays append-only: the target and every version after it are
    left untouched.
    """

    def __init__(self, aggregate: ResumeAggregate) -> None:
        self._aggregate = aggregate

    async def rollback(self, resume_id: UUID, target_version: int) -> RollbackResult:
        """Roll resume back to ``target_version``."""
        if isinstance(target_version, bool) or not isinstance(target_version, int):
            raise ValidationError("version_number must be an integer")
        if target_version < 1:
            raise ValidationError("version_number must be a positive integer")

        async def step(uow: UnitOfWork) -> RollbackResult:
            target = await uow.versions.get(resume_id, target_version)
            if not target:
                raise NotFound("Version", f"{resume_id} v{target_version}")
            resume = await self._aggregate.load(uow, resume_id)
            changed = diff_sections(resume.data, target.data)
            updated = await self._aggregate.append_and_advance(
                uow,
                resume,
                target.data,
                changed,
                f"Rolled back to v{target_version}",
                ChangeType.ROLLBACK,
            )
            return RollbackResult(
                new_version=updated.current_version,
                target_version=target_version,
                changed_sections=tuple(changed),
                resume=updated,
            )

        result = await self._aggregate.run_versioned(resume_id, step)
        logger.info(
            "Rolled resume %s back to v%d as v%d",
            resume_id,
            target_version,
            result.new_version,
        )
        return result

"""Application services coordinating the version log and the live resume."""

from resumevault.application.services.resume_aggregate import ResumeAggregate
from resumevault.application.services.rollback_coordinator import RollbackCoordinator
from resumevault.application.services.snapshot_resolver import SnapshotResolver

__all__ = ["ResumeAggregate", "RollbackCoordinator", "SnapshotResolver"]

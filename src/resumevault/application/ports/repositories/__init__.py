"""Repository ports."""

from resumevault.application.ports.repositories.generation_repository import (
    GenerationRepository,
)
from resumevault.application.ports.repositories.resume_repository import ResumeRepository
from resumevault.application.ports.repositories.resume_version_repository import (
    ResumeVersionRepository,
)

__all__ = [
    "GenerationRepository",
    "ResumeRepository",
    "ResumeVersionRepository",
]

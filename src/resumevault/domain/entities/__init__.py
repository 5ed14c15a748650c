"""Domain entities."""

from resumevault.domain.entities.generation import Generation
from resumevault.domain.entities.resume import Resume
from resumevault.domain.entities.resume_version import ResumeVersion, ResumeVersionSummary

__all__ = [
    "Generation",
    "Resume",
    "ResumeVersion",
    "ResumeVersionSummary",
]

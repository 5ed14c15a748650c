"""Domain exceptions."""

from uuid import UUID


class ResumeVaultError(Exception):
    """Base exception for ResumeVault."""

    pass


class NotFound(ResumeVaultError):
    """Requested resource was not found."""

    def __init__(self, kind: str, identifier: object) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class ValidationError(ResumeVaultError):
    """Validation failed for input data."""

    pass


class VersionConflict(ResumeVaultError):
    """Concurrent writers raced on the same resume's version sequence."""

    def __init__(self, resume_id: UUID, version_number: int) -> None:
        self.resume_id = resume_id
        self.version_number = version_number
        super().__init__(
            f"Version conflict on resume {resume_id} at version {version_number}"
        )


class StoreUnavailable(ResumeVaultError):
    """Underlying storage failed."""

    pass

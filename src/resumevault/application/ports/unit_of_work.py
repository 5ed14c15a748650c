"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from resumevault.application.ports.repositories import (
    GenerationRepository,
    ResumeRepository,
    ResumeVersionRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def resumes(self) -> ResumeRepository: ...

    @property
    def versions(self) -> ResumeVersionRepository: ...

    @property
    def generations(self) -> GenerationRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for UnitOfWork instances.

    Each call opens one transaction; it commits when the block exits cleanly
    and rolls back when the block raises.
    """

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...

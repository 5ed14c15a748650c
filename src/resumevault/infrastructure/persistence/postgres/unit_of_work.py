"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg import OperationalError
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from resumevault.domain.exceptions import StoreUnavailable
from resumevault.infrastructure.persistence.postgres.generation_repository import (
    PostgresGenerationRepository,
)
from resumevault.infrastructure.persistence.postgres.resume_repository import (
    PostgresResumeRepository,
)
from resumevault.infrastructure.persistence.postgres.resume_version_repository import (
    PostgresResumeVersionRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._resumes = PostgresResumeRepository(self._conn)
        self._versions = PostgresResumeVersionRepository(self._conn)
        self._generations = PostgresGenerationRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def resumes(self) -> PostgresResumeRepository:
        return self._resumes

    @property
    def versions(self) -> PostgresResumeVersionRepository:
        return self._versions

    @property
    def generations(self) -> PostgresGenerationRepository:
        return self._generations

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Connection and I/O failures surface as StoreUnavailable.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except (OperationalError, PoolTimeout) as e:
            raise StoreUnavailable(str(e)) from e

    return factory

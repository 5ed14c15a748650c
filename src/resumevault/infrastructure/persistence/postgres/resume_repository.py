"""PostgreSQL resume repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from resumevault.domain.entities import Resume
from resumevault.domain.exceptions import VersionConflict
from resumevault.domain.value_objects import SectionMap

_COLUMNS = "id, meta_code, title, data, current_version, created_at, updated_at, user_id"


def _row_to_resume(r: tuple) -> Resume:
    return Resume(
        id=r[0],
        meta_code=r[1],
        title=r[2],
        data=r[3],
        current_version=r[4],
        created_at=r[5],
        updated_at=r[6],
        user_id=r[7],
    )


class PostgresResumeRepository:
    """Resume repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, resume_id: UUID) -> Resume | None:
        """Get resume by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resume WHERE id = %s",
            (resume_id,),
        )
        r = await cur.fetchone()
        return _row_to_resume(r) if r else None

    async def get_by_meta_code(self, meta_code: str) -> Resume | None:
        """Get the most recently updated resume with this meta code."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resume WHERE meta_code = %s "
            "ORDER BY updated_at DESC LIMIT 1",
            (meta_code,),
        )
        r = await cur.fetchone()
        return _row_to_resume(r) if r else None

    async def list(
        self,
        *,
        meta_code: str | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Resume], str | None]:
        """List resumes with cursor pagination."""
        conditions = []
        _params: list[object] = []
        if meta_code:
            conditions.append("meta_code = %s")
            _params.append(meta_code)
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resume{where} ORDER BY id LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        resumes = [_row_to_resume(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return resumes, next_cursor

    async def create(self, resume: Resume) -> Resume:
        """Create resume."""
        await self._conn.execute(
            "INSERT INTO resume (id, meta_code, title, data, current_version, "
            "created_at, updated_at, user_id) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                resume.id,
                resume.meta_code,
                resume.title,
                Jsonb(resume.data),
                resume.current_version,
                resume.created_at,
                resume.updated_at,
                resume.user_id,
            ),
        )
        return resume

    async def advance_version(
        self,
        resume_id: UUID,
        *,
        expected_version: int,
        data: SectionMap,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume:
        """Compare-and-swap current_version from expected_version to expected_version + 1."""
        cur = await self._conn.execute(
            "UPDATE resume SET data = %s, current_version = current_version + 1, "
            "title = COALESCE(%s, title), meta_code = COALESCE(%s, meta_code), "
            f"updated_at = %s WHERE id = %s AND current_version = %s RETURNING {_COLUMNS}",
            (Jsonb(data), title, meta_code, updated_at, resume_id, expected_version),
        )
        r = await cur.fetchone()
        if not r:
            raise VersionConflict(resume_id, expected_version + 1)
        return _row_to_resume(r)

    async def update_details(
        self,
        resume_id: UUID,
        *,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume | None:
        """Update title and/or meta code only."""
        cur = await self._conn.execute(
            "UPDATE resume SET title = COALESCE(%s, title), "
            "meta_code = COALESCE(%s, meta_code), updated_at = %s "
            f"WHERE id = %s RETURNING {_COLUMNS}",
            (title, meta_code, updated_at, resume_id),
        )
        r = await cur.fetchone()
        return _row_to_resume(r) if r else None

    async def merge_sections(
        self,
        resume_id: UUID,
        patches: SectionMap,
        *,
        title: str | None,
        meta_code: str | None,
        updated_at: datetime,
    ) -> Resume | None:
        """Replace top-level sections with jsonb || (shallow, atomic)."""
        cur = await self._conn.execute(
            "UPDATE resume SET data = data || %s, title = COALESCE(%s, title), "
            "meta_code = COALESCE(%s, meta_code), updated_at = %s "
            f"WHERE id = %s RETURNING {_COLUMNS}",
            (Jsonb(patches), title, meta_code, updated_at, resume_id),
        )
        r = await cur.fetchone()
        return _row_to_resume(r) if r else None

    async def delete(self, resume_id: UUID) -> None:
        """Delete resume; versions and generations cascade."""
        await self._conn.execute("DELETE FROM resume WHERE id = %s", (resume_id,))

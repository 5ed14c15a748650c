"""PostgreSQL resume version repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import ForeignKeyViolation, UniqueViolation
from psycopg.types.json import Jsonb

from resumevault.domain.entities import ResumeVersion, ResumeVersionSummary
from resumevault.domain.exceptions import NotFound, VersionConflict
from resumevault.domain.value_objects import ChangeType


class PostgresResumeVersionRepository:
    """Append-only version log backed by resume_version.

    The primary key (resume_id, version_number) is what rejects a second
    writer for the same version number.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, version: ResumeVersion) -> ResumeVersion:
        """Insert version row."""
        try:
            await self._conn.execute(
                "INSERT INTO resume_version (resume_id, version_number, data, "
                "changed_sections, change_summary, change_type, created_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s)",
                (
                    version.resume_id,
                    version.version_number,
                    Jsonb(version.data),
                    list(version.changed_sections),
                    version.change_summary,
                    version.change_type.value,
                    version.created_at,
                ),
            )
        except UniqueViolation as e:
            raise VersionConflict(version.resume_id, version.version_number) from e
        except ForeignKeyViolation as e:
            raise NotFound("Resume", str(version.resume_id)) from e
        return version

    async def get(self, resume_id: UUID, version_number: int) -> ResumeVersion | None:
        """Get version with full data."""
        cur = await self._conn.execute(
            "SELECT resume_id, version_number, data, changed_sections, change_summary, "
            "change_type, created_at FROM resume_version "
            "WHERE resume_id = %s AND version_number = %s",
            (resume_id, version_number),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return ResumeVersion(
            resume_id=r[0],
            version_number=r[1],
            data=r[2],
            changed_sections=tuple(r[3] or ()),
            change_summary=r[4] or "",
            change_type=ChangeType(r[5]),
            created_at=r[6],
        )

    async def list(self, resume_id: UUID) -> list[ResumeVersionSummary]:
        """List versions newest first. Data is not selected."""
        cur = await self._conn.execute(
            "SELECT resume_id, version_number, changed_sections, change_summary, "
            "change_type, created_at FROM resume_version "
            "WHERE resume_id = %s ORDER BY version_number DESC",
            (resume_id,),
        )
        rows = await cur.fetchall()
        return [
            ResumeVersionSummary(
                resume_id=r[0],
                version_number=r[1],
                changed_sections=tuple(r[2] or ()),
                change_summary=r[3] or "",
                change_type=ChangeType(r[4]),
                created_at=r[5],
            )
            for r in rows
        ]

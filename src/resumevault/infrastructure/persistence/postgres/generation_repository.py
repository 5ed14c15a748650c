"""PostgreSQL generation repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from resumevault.domain.entities import Generation
from resumevault.domain.value_objects import GenerationStatus

# resume_data is left out of reads; the worker takes it from the snapshot.
_COLUMNS = (
    "id, resume_id, version_number, status, output_filename, meta_code, "
    "created_at, updated_at, pdf_path, drive_link, error_log"
)


def _row_to_generation(r: tuple) -> Generation:
    return Generation(
        id=r[0],
        resume_id=r[1],
        version_number=r[2],
        status=GenerationStatus(r[3]),
        output_filename=r[4],
        meta_code=r[5],
        resume_data=None,
        created_at=r[6],
        updated_at=r[7],
        pdf_path=r[8],
        drive_link=r[9],
        error_log=r[10],
    )


class PostgresGenerationRepository:
    """Generation job repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, generation_id: UUID) -> Generation | None:
        """Get job by id (without snapshot data)."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM generation WHERE id = %s",
            (generation_id,),
        )
        r = await cur.fetchone()
        return _row_to_generation(r) if r else None

    async def list(
        self,
        *,
        resume_id: UUID | None = None,
        limit: int = 50,
    ) -> list[Generation]:
        """List jobs newest first."""
        where = " WHERE resume_id = %s" if resume_id else ""
        params: tuple = (resume_id, limit) if resume_id else (limit,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM generation{where} ORDER BY created_at DESC LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        return [_row_to_generation(r) for r in rows]

    async def create(self, generation: Generation) -> Generation:
        """Create job."""
        await self._conn.execute(
            "INSERT INTO generation (id, resume_id, version_number, status, output_filename, "
            "meta_code, resume_data, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                generation.id,
                generation.resume_id,
                generation.version_number,
                generation.status.value,
                generation.output_filename,
                generation.meta_code,
                Jsonb(generation.resume_data),
                generation.created_at,
                generation.updated_at,
            ),
        )
        return generation

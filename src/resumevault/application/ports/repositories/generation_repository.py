"""Generation job repository port."""

from typing import Protocol
from uuid import UUID

from resumevault.domain.entities import Generation


class GenerationRepository(Protocol):
    """Port for generation job persistence."""

    async def get_by_id(self, generation_id: UUID) -> Generation | None: ...

    async def list(
        self,
        *,
        resume_id: UUID | None = None,
        limit: int = 50,
    ) -> list[Generation]: ...

    async def create(self, generation: Generation) -> Generation: ...

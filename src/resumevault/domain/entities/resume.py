"""Resume entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from resumevault.domain.value_objects import SectionMap


@dataclass
class Resume:
    """Mutable aggregate root: the live projection of the current version."""

    id: UUID
    meta_code: str
    title: str
    data: SectionMap
    current_version: int
    created_at: datetime
    updated_at: datetime
    user_id: str = "anonymous"

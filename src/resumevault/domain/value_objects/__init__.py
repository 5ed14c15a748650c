"""Domain value objects."""

from resumevault.domain.value_objects.change_type import ChangeType
from resumevault.domain.value_objects.generation_status import GenerationStatus
from resumevault.domain.value_objects.json_value import JsonValue, SectionMap

__all__ = [
    "ChangeType",
    "GenerationStatus",
    "JsonValue",
    "SectionMap",
]

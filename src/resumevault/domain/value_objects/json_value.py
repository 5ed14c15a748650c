"""JSON payload types for resume sections."""

from typing import TypeAlias

JsonValue: TypeAlias = (
    None | bool | int | float | str | list["JsonValue"] | dict[str, "JsonValue"]
)

# Top-level section name -> section content (basics, work, skills, ...).
SectionMap: TypeAlias = dict[str, JsonValue]

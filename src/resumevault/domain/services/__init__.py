"""Pure domain services."""

from resumevault.domain.services.output_filename import generate_output_filename
from resumevault.domain.services.section_diff import (
    diff_sections,
    generate_change_summary,
    json_equal,
)

__all__ = [
    "diff_sections",
    "generate_change_summary",
    "generate_output_filename",
    "json_equal",
]

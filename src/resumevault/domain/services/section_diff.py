"""Section-level diff between two resume payloads.

Only top-level keys (basics, work, skills, ...) are compared; a section is
either unchanged or changed as a whole.
"""

from resumevault.domain.value_objects import JsonValue, SectionMap

# Marks a key present in one map and absent in the other. Distinct from None,
# which is a JSON null.
_MISSING = object()


def json_equal(a: JsonValue | object, b: JsonValue | object) -> bool:
    """Structural equality over JSON values.

    Objects compare by key set and values, arrays element-by-element (order
    and length sensitive), primitives by value. Booleans never equal numbers.
    """
    if a is _MISSING or b is _MISSING:
        return a is b
    if a is None or b is None:
        return a is b
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(json_equal(a[k], b[k]) for k in a)
    return False


def diff_sections(previous: SectionMap | None, next_data: SectionMap) -> list[str]:
    """Return the names of sections that differ between two payloads.

    With no previous payload every section of ``next_data`` is new. Order is
    first appearance scanning ``previous`` keys, then ``next_data`` keys.
    """
    if previous is None:
        return list(next_data)

    keys = list(previous)
    keys.extend(k for k in next_data if k not in previous)
    return [
        key
        for key in keys
        if not json_equal(previous.get(key, _MISSING), next_data.get(key, _MISSING))
    ]


def generate_change_summary(changed_sections: list[str] | tuple[str, ...]) -> str:
    """Human-readable description of a set of changed sections."""
    if not changed_sections:
        return "No changes detected"
    if len(changed_sections) == 1:
        return f"Updated {changed_sections[0]}"
    if len(changed_sections) <= 3:
        return f"Updated {', '.join(changed_sections)}"
    return f"Updated {len(changed_sections)} sections"

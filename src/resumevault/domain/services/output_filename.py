"""Output filename convention for generated PDFs.

``{FirstLast}_{META}_{YYMM}_v{N}``, e.g. ``JohnDoe_SWE_2602_v4``.
"""

import re
from datetime import datetime

_NON_LETTERS = re.compile(r"[^a-zA-Z\s]")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def generate_output_filename(
    full_name: str, meta_code: str, version: int, now: datetime
) -> str:
    """Build the PDF filename (without extension) for a generation job."""
    clean_name = "".join(
        part[:1].upper() + part[1:].lower()
        for part in _NON_LETTERS.sub("", full_name).split()
    )
    clean_meta = _NON_ALNUM.sub("", meta_code).upper()
    return f"{clean_name}_{clean_meta}_{now:%y%m}_v{version}"

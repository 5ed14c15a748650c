"""PDF generation job status."""

from enum import Enum


class GenerationStatus(str, Enum):
    """Lifecycle of a generation job, driven by the external worker."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

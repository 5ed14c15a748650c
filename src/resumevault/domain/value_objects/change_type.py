"""Reason a resume version exists."""

from enum import Enum


class ChangeType(str, Enum):
    """What triggered a version snapshot."""

    EDIT = "edit"
    UPLOAD = "upload"
    ROLLBACK = "rollback"

"""ResumeVault - versioned resume documents with immutable edit history."""

__version__ = "0.1.0"

"""Generation use cases."""

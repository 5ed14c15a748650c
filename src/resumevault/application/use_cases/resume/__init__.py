"""Resume use cases."""

"""Version use cases."""

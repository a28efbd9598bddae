"""Application layer - use cases built on auth_core."""

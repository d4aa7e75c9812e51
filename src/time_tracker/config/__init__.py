"""Static constants, user-facing messages and runtime settings."""

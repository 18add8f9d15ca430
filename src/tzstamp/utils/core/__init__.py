"""Core utilities: errors and version lookup."""

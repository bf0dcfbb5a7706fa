"""Authentication infrastructure."""

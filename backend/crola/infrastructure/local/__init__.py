"""SQLite-backed implementations for local and single-node deployments."""

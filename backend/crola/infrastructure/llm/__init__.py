"""Chat-completion providers."""

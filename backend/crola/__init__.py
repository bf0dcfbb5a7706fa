"""Crola Chat backend package."""

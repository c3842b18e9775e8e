"""Data access repositories."""

"""FastAPI service for the Onion Movies catalog.

This package provides REST API endpoints for a movie catalog layered as
router → service → repository → SQLite database.
"""

__version__ = "1.0.0"

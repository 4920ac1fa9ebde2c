"""In-memory product catalog REST API."""

__version__ = "1.0.0"

"""HTMX task board served by FastAPI."""

__version__ = "1.0.0"

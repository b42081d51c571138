"""HR records backend (FastAPI + PostgreSQL)."""

__version__ = "0.1.0"

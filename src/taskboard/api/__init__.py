"""
Task store API package.

Marks the 'taskboard.api' directory as a Python package and exposes the
FastAPI app instance for convenience imports (taskboard.api.app).
"""

from .main import app  # noqa: F401

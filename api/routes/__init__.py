"""API route modules."""
from api.routes import editors, questions

__all__ = ["editors", "questions"]

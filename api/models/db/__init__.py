"""Database models."""
from api.models.db.question import QuestionRecord

__all__ = ["QuestionRecord"]

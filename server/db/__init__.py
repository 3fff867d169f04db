"""Database layer: SQLAlchemy models, session and problem repository."""

from server.db.models import Base, ProblemRow
from server.db.session import get_db, init_db
from server.db.store import SqlProblemStore

__all__ = [
    "Base",
    "ProblemRow",
    "SqlProblemStore",
    "get_db",
    "init_db",
]

"""SQL-backed problem repository."""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select

from practice.models import Problem, ProblemMemoryState, validate_state
from server.config import Settings
from server.db.models import ProblemRow
from server.db.session import get_db, init_db

logger = logging.getLogger("leetrepeat.storage")


def _row_to_problem(row: ProblemRow) -> Problem:
    return Problem(
        problem_id=row.problem_id,
        url=row.url,
        title=row.title,
        created_at=row.created_at,
        state=ProblemMemoryState(
            next_review_at=row.next_review_at,
            easiness_factor=row.easiness_factor,
            repetition_count=row.repetition_count,
            interval_days=row.interval_days,
            last_reviewed_at=row.last_reviewed_at,
        ),
    )


class SqlProblemStore:
    """
    Problem repository over SQLAlchemy.

    Same interface as the JSONL ProblemStore. all() returns rows in
    insertion order.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        init_db(settings)
        logger.debug("SQL problem store ready")

    def get(self, problem_id: str) -> Optional[Problem]:
        with get_db(self.settings) as db:
            row = db.scalar(select(ProblemRow).where(ProblemRow.problem_id == problem_id))
            return _row_to_problem(row) if row is not None else None

    def save(self, problem: Problem) -> None:
        """Insert or update a problem by problem_id."""
        s = validate_state(problem.state)
        with get_db(self.settings) as db:
            row = db.scalar(select(ProblemRow).where(ProblemRow.problem_id == problem.problem_id))
            if row is None:
                row = ProblemRow(problem_id=problem.problem_id)
                db.add(row)
            row.url = problem.url
            row.title = problem.title
            row.created_at = problem.created_at
            row.easiness_factor = s.easiness_factor
            row.repetition_count = s.repetition_count
            row.interval_days = s.interval_days
            row.next_review_at = s.next_review_at
            row.last_reviewed_at = s.last_reviewed_at

    def delete(self, problem_id: str) -> bool:
        with get_db(self.settings) as db:
            result = db.execute(delete(ProblemRow).where(ProblemRow.problem_id == problem_id))
            return result.rowcount > 0

    def all(self) -> List[Problem]:
        with get_db(self.settings) as db:
            rows = db.scalars(select(ProblemRow).order_by(ProblemRow.id)).all()
            return [_row_to_problem(r) for r in rows]

    def count(self) -> int:
        with get_db(self.settings) as db:
            return db.scalar(select(func.count()).select_from(ProblemRow))

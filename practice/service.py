"""Review service -- add, grade and remove problems, build the review queue.

All functions take the repository explicitly and return plain records or
JSON-serializable dicts. The scheduling core never sees the repository.
"""

import logging
import threading
import weakref
from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional

from practice.labels import due_label
from practice.models import Problem, make_problem_id
from practice.queue import partition_problems
from practice.scheduler import check_grade, schedule
from practice.storage import ProblemRepository
from practice.titles import extract_title, normalize_url

logger = logging.getLogger("leetrepeat.review")

# Serializes read-modify-write of a single problem; distinct ids run in parallel.
# An entry lives only while some caller holds its lock.
_record_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_record_locks_guard = threading.Lock()


class ProblemNotFoundError(KeyError):
    pass


class DuplicateProblemError(ValueError):
    pass


def _lock_for(problem_id: str) -> threading.Lock:
    with _record_locks_guard:
        lock = _record_locks.get(problem_id)
        if lock is None:
            lock = threading.Lock()
            _record_locks[problem_id] = lock
        return lock


def add_problem(
    store: ProblemRepository,
    url: str,
    now: Optional[datetime] = None,
    title: Optional[str] = None,
) -> Problem:
    """
    Track a new problem. It is due immediately.

    Raises:
        ValueError if url is blank, DuplicateProblemError if already tracked.
    """
    if not url or not url.strip():
        raise ValueError("Problem URL must not be empty")
    if now is None:
        now = datetime.now()

    url = normalize_url(url)
    problem_id = make_problem_id(url)
    with _lock_for(problem_id):
        if store.get(problem_id) is not None:
            raise DuplicateProblemError(f"Problem already tracked: {url}")
        problem = Problem(
            problem_id=problem_id,
            url=url,
            title=(title or '').strip() or extract_title(url),
            created_at=now,
        )
        store.save(problem)
    logger.info("Added problem %s (%s)", problem_id, problem.title)
    return problem


def get_problem(store: ProblemRepository, problem_id: str) -> Problem:
    problem = store.get(problem_id)
    if problem is None:
        raise ProblemNotFoundError(f"Problem not found: {problem_id}")
    return problem


def grade_problem(
    store: ProblemRepository,
    problem_id: str,
    grade: int,
    now: Optional[datetime] = None,
) -> Problem:
    """
    Apply a grade to a stored problem and persist the new schedule.

    Raises:
        InvalidGradeError for a grade outside 0-5,
        ProblemNotFoundError if problem_id is unknown.
    """
    check_grade(grade)
    if now is None:
        now = datetime.now()

    with _lock_for(problem_id):
        problem = get_problem(store, problem_id)
        problem = replace(problem, state=schedule(problem.state, grade, now))
        store.save(problem)

    s = problem.state
    logger.info(
        "Graded %s with %d: interval=%dd reps=%d ease=%.2f next=%s",
        problem_id, grade, s.interval_days, s.repetition_count,
        s.easiness_factor, s.next_review_at.isoformat(),
    )
    return problem


def remove_problem(store: ProblemRepository, problem_id: str) -> None:
    with _lock_for(problem_id):
        if not store.delete(problem_id):
            raise ProblemNotFoundError(f"Problem not found: {problem_id}")
    logger.info("Removed problem %s", problem_id)


def problem_summary(problem: Problem, now: datetime) -> Dict:
    """Convert a Problem to a JSON-safe summary dict."""
    s = problem.state
    return {
        'problem_id': problem.problem_id,
        'url': problem.url,
        'title': problem.title,
        'created_at': problem.created_at.isoformat(),
        'easiness_factor': s.easiness_factor,
        'repetition_count': s.repetition_count,
        'interval_days': s.interval_days,
        'next_review_at': s.next_review_at.isoformat(),
        'last_reviewed_at': s.last_reviewed_at.isoformat() if s.last_reviewed_at else None,
        'due_label': due_label(s.next_review_at, now),
    }


def review_queue(store: ProblemRepository, now: Optional[datetime] = None) -> Dict:
    """Due problems in storage order, upcoming problems soonest first."""
    if now is None:
        now = datetime.now()
    problems = store.all()
    due, upcoming = partition_problems(problems, now)
    return {
        'due_count': len(due),
        'upcoming_count': len(upcoming),
        'total_problems': len(problems),
        'total_reviews': sum(p.state.repetition_count for p in problems),
        'due': [problem_summary(p, now) for p in due],
        'upcoming': [problem_summary(p, now) for p in upcoming],
    }

"""Split problems into the due queue and the upcoming list."""

from datetime import datetime
from typing import Hashable, Iterable, List, NamedTuple, Tuple

from practice.models import Problem, ProblemMemoryState


class ReviewQueue(NamedTuple):
    due: List[Hashable]
    upcoming: List[Hashable]


def partition(
    entries: Iterable[Tuple[Hashable, ProblemMemoryState]],
    now: datetime,
) -> ReviewQueue:
    """
    Partition (id, state) pairs at `now`.

    due keeps input order; upcoming is sorted by next_review_at ascending,
    ties in input order (sorted() is stable).
    """
    due = []
    pending = []
    for key, state in entries:
        if state.next_review_at <= now:
            due.append(key)
        else:
            pending.append((state.next_review_at, key))
    pending.sort(key=lambda p: p[0])
    return ReviewQueue(due=due, upcoming=[key for _, key in pending])


def partition_problems(problems: Iterable[Problem], now: datetime) -> Tuple[List[Problem], List[Problem]]:
    """Same as partition() but over Problem records, returning the records."""
    problems = list(problems)
    queue = partition(((i, p.state) for i, p in enumerate(problems)), now)
    return [problems[i] for i in queue.due], [problems[i] for i in queue.upcoming]

"""Data models for the practice tracker: ProblemMemoryState and Problem."""

import hashlib
import math
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, Optional

from practice.titles import normalize_url


DEFAULT_EASINESS = 2.5
MIN_EASINESS = 1.3
DEFAULT_INTERVAL_DAYS = 1


class InvalidStateError(ValueError):
    """A memory state violates the scheduling invariants."""


@dataclass
class ProblemMemoryState:
    """
    SM-2 memory parameters for a single problem.

    next_review_at is always derived by the scheduler from the last grading
    event (or creation time) plus interval_days; never set it by hand.
    """
    next_review_at: datetime
    easiness_factor: float = DEFAULT_EASINESS
    repetition_count: int = 0
    interval_days: int = DEFAULT_INTERVAL_DAYS
    last_reviewed_at: Optional[datetime] = None

    @classmethod
    def initial(cls, created_at: datetime) -> 'ProblemMemoryState':
        """Creation defaults. A new problem is due immediately."""
        return cls(next_review_at=created_at)

    def to_dict(self) -> Dict:
        d = asdict(self)
        d['next_review_at'] = self.next_review_at.isoformat()
        if self.last_reviewed_at is not None:
            d['last_reviewed_at'] = self.last_reviewed_at.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: Dict) -> 'ProblemMemoryState':
        data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        data['next_review_at'] = _parse_ts(data['next_review_at'])
        data['last_reviewed_at'] = _parse_ts(data.get('last_reviewed_at'))
        return cls(**data)


def validate_state(state: ProblemMemoryState) -> ProblemMemoryState:
    """Raise InvalidStateError unless the numeric invariants hold."""
    if isinstance(state.repetition_count, bool) or not isinstance(state.repetition_count, int):
        raise InvalidStateError(f"repetition_count must be an int, got {state.repetition_count!r}")
    if isinstance(state.interval_days, bool) or not isinstance(state.interval_days, int):
        raise InvalidStateError(f"interval_days must be an int, got {state.interval_days!r}")
    ef = state.easiness_factor
    if isinstance(ef, bool) or not isinstance(ef, (int, float)) or not math.isfinite(ef):
        raise InvalidStateError(f"easiness_factor must be a finite number, got {ef!r}")
    if ef < MIN_EASINESS:
        raise InvalidStateError(
            f"easiness_factor must be >= {MIN_EASINESS}, got {state.easiness_factor}"
        )
    if state.repetition_count < 0:
        raise InvalidStateError(f"repetition_count must be >= 0, got {state.repetition_count}")
    if state.interval_days < 1:
        raise InvalidStateError(f"interval_days must be >= 1, got {state.interval_days}")
    if not isinstance(state.next_review_at, datetime):
        raise InvalidStateError("next_review_at must be a datetime")
    if state.last_reviewed_at is not None and not isinstance(state.last_reviewed_at, datetime):
        raise InvalidStateError("last_reviewed_at must be a datetime or None")
    return state


@dataclass
class Problem:
    """
    A tracked coding problem together with its memory state.

    problem_id is a deterministic SHA-256 hash of the normalized URL.
    """
    problem_id: str
    url: str
    title: str
    created_at: datetime = field(default_factory=datetime.now)
    state: Optional[ProblemMemoryState] = None

    def __post_init__(self):
        if self.state is None:
            self.state = ProblemMemoryState.initial(self.created_at)

    def to_dict(self) -> Dict:
        return {
            'problem_id': self.problem_id,
            'url': self.url,
            'title': self.title,
            'created_at': self.created_at.isoformat(),
            'state': self.state.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Problem':
        state = data.get('state')
        return cls(
            problem_id=data['problem_id'],
            url=data['url'],
            title=data.get('title', ''),
            created_at=_parse_ts(data['created_at']),
            state=ProblemMemoryState.from_dict(state) if state else None,
        )


def make_problem_id(url: str) -> str:
    """Deterministic problem ID, SHA-256 of the normalized URL truncated to 16 hex chars."""
    key = normalize_url(url).lower()
    return hashlib.sha256(key.encode('utf-8')).hexdigest()[:16]


def _parse_ts(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)

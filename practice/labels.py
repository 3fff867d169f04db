"""Presentation helpers: due-date labels and the grading scale."""

from datetime import datetime, timedelta
from typing import Dict, List, NamedTuple

from practice.scheduler import check_grade


class GradeInfo(NamedTuple):
    grade: int
    label: str
    description: str


GRADES: List[GradeInfo] = [
    GradeInfo(0, 'No Clue', 'Zero clue how to do it'),
    GradeInfo(1, 'Vague Recall', "Didn't solve, but had guesses / vaguely recalled solution"),
    GradeInfo(2, 'Right Idea', "Didn't solve, but had mostly the right idea"),
    GradeInfo(3, 'Solved Hard', 'Solved, but took significant effort / many attempts'),
    GradeInfo(4, 'Solved OK', 'Solved, but felt tricky or was not the best solution'),
    GradeInfo(5, 'Solved Easy', 'Solved smoothly and easily'),
]


def grade_info(grade: int) -> GradeInfo:
    return GRADES[check_grade(grade)]


def grades_as_dicts() -> List[Dict]:
    return [g._asdict() for g in GRADES]


def due_label(next_review_at: datetime, now: datetime) -> str:
    """
    "Today" if next_review_at falls on now's calendar date, "Tomorrow" on the
    next one, otherwise the ISO date.
    """
    day = next_review_at.date()
    today = now.date()
    if day == today:
        return 'Today'
    if day == today + timedelta(days=1):
        return 'Tomorrow'
    return day.isoformat()

"""Interactive review session runner with injectable IO."""

from datetime import datetime
from typing import Callable, Dict, List, Optional

from practice.labels import GRADES, due_label
from practice.models import Problem
from practice.scheduler import MAX_GRADE, MIN_GRADE, PASSING_GRADE
from practice.service import grade_problem
from practice.storage import ProblemRepository

_GRADE_INPUTS = frozenset(str(g) for g in range(MIN_GRADE, MAX_GRADE + 1))


def _read_grade(
    input_fn: Callable[[str], str],
    output_fn: Callable[[str], None],
) -> Optional[str]:
    """Prompt until the user enters a grade, 's' or 'q'."""
    while True:
        raw = input_fn(f"Grade {MIN_GRADE}-{MAX_GRADE} (s=skip, q=quit): ").strip().lower()
        if raw in ('s', 'q'):
            return raw
        if raw in _GRADE_INPUTS:
            return raw
        output_fn(f"  Please enter a number {MIN_GRADE}-{MAX_GRADE}, 's' or 'q'.")


def run_review_session(
    storage: ProblemRepository,
    due_problems: List[Problem],
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
    clock: Callable[[], datetime] = datetime.now,
) -> Dict:
    """
    Walk through due problems and grade each one.

    IO and the clock are injectable for testability.

    Returns:
        Summary dict: {reviewed, passed, failed, skipped}
    """
    reviewed = 0
    passed = 0
    failed = 0
    skipped = 0

    output_fn(f"\n{'='*60}")
    output_fn(f"REVIEW SESSION -- {len(due_problems)} problem(s) due")
    output_fn(f"{'='*60}")
    for g in GRADES:
        output_fn(f"  {g.grade} {g.label:<13} {g.description}")

    for i, problem in enumerate(due_problems, 1):
        output_fn(f"\n--- Problem {i}/{len(due_problems)} ---")
        output_fn(f"  {problem.title}")
        output_fn(f"  {problem.url}")

        try:
            choice = _read_grade(input_fn, output_fn)
        except (EOFError, KeyboardInterrupt):
            output_fn("\nSession ended.")
            break

        if choice == 'q':
            output_fn("Session ended.")
            break
        if choice == 's':
            skipped += 1
            continue

        grade = int(choice)
        now = clock()
        updated = grade_problem(storage, problem.problem_id, grade, now=now)
        reviewed += 1
        if grade >= PASSING_GRADE:
            passed += 1
        else:
            failed += 1
        output_fn(f"  Next review: {due_label(updated.state.next_review_at, now)} "
                  f"(in {updated.state.interval_days}d)")

    output_fn(f"\nReviewed {reviewed}: {passed} passed, {failed} failed, {skipped} skipped.")
    return {
        'reviewed': reviewed,
        'passed': passed,
        'failed': failed,
        'skipped': skipped,
    }

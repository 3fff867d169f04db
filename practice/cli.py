"""
Practice tracker CLI.

Usage:
    python -m practice.cli --db problems.jsonl add https://leetcode.com/problems/two-sum/
    python -m practice.cli --db problems.jsonl list
    python -m practice.cli --db problems.jsonl grade <problem_id> <0-5>
    python -m practice.cli --db problems.jsonl review
    python -m practice.cli --db problems.jsonl show <problem_id>
    python -m practice.cli --db problems.jsonl remove <problem_id>
    python -m practice.cli grades
"""

import argparse
import logging
import os
import sys
from datetime import datetime

from practice import service
from practice.labels import GRADES, due_label, grade_info
from practice.queue import partition_problems
from practice.scheduler import InvalidGradeError
from practice.session import run_review_session
from server.config import Settings
from server.runtime import open_store


def _open(args):
    settings = Settings(
        problems_db_path=args.db,
        storage_backend=args.backend,
        log_level=args.log_level,
    )
    return open_store(settings)


def cmd_add(args):
    """Track a new problem."""
    store = _open(args)
    try:
        problem = service.add_problem(store, args.url, title=args.title)
    except ValueError as e:
        print(str(e))
        sys.exit(1)
    print(f"Added [{problem.problem_id}] {problem.title} -- due now")


def cmd_list(args):
    """Show due and upcoming problems."""
    store = _open(args)
    now = datetime.now()
    due, upcoming = partition_problems(store.all(), now)

    if not due and not upcoming:
        print("No problems tracked yet. Add one with 'add <url>'.")
        return

    print(f"\nDue ({len(due)}):")
    if not due:
        print("  Nothing due. Come back later!")
    for p in due:
        print(f"  [{p.problem_id}] {p.title}")

    print(f"\nUpcoming ({len(upcoming)}):")
    for p in upcoming:
        s = p.state
        print(f"  [{p.problem_id}] {p.title}  "
              f"{due_label(s.next_review_at, now)}  "
              f"interval={s.interval_days}d  ease={s.easiness_factor:.2f}  "
              f"reps={s.repetition_count}")


def cmd_grade(args):
    """Grade one problem."""
    store = _open(args)
    now = datetime.now()
    try:
        problem = service.grade_problem(store, args.problem_id, args.grade, now=now)
    except service.ProblemNotFoundError:
        print(f"Problem not found: {args.problem_id}")
        sys.exit(1)
    except InvalidGradeError as e:
        print(str(e))
        sys.exit(1)
    s = problem.state
    print(f"{problem.title}: {grade_info(args.grade).label}")
    print(f"  Next review: {due_label(s.next_review_at, now)} "
          f"(in {s.interval_days}d, ease={s.easiness_factor:.2f}, reps={s.repetition_count})")


def cmd_review(args):
    """Run interactive review session."""
    store = _open(args)
    due, _ = partition_problems(store.all(), datetime.now())
    if not due:
        print("No problems due. Come back later!")
        return
    run_review_session(store, due)


def cmd_show(args):
    """Show one problem's schedule."""
    store = _open(args)
    problem = store.get(args.problem_id)
    if problem is None:
        print(f"Problem not found: {args.problem_id}")
        sys.exit(1)
    s = problem.state
    now = datetime.now()
    print(f"\n  Problem:  {problem.problem_id}")
    print(f"  Title:    {problem.title}")
    print(f"  URL:      {problem.url}")
    print(f"\n  Schedule:")
    print(f"    Due:        {due_label(s.next_review_at, now)} ({s.next_review_at.isoformat()})")
    print(f"    Interval:   {s.interval_days}d")
    print(f"    Ease:       {s.easiness_factor:.2f}")
    print(f"    Reps:       {s.repetition_count}")
    print(f"    Reviewed:   {s.last_reviewed_at.isoformat() if s.last_reviewed_at else 'never'}")
    print(f"    Created:    {problem.created_at.isoformat()}")


def cmd_remove(args):
    store = _open(args)
    try:
        service.remove_problem(store, args.problem_id)
    except service.ProblemNotFoundError:
        print(f"Problem not found: {args.problem_id}")
        sys.exit(1)
    print(f"Removed {args.problem_id}")


def cmd_grades(args):
    """Print the grading scale."""
    print("\nGrading scale (3-5 pass, 0-2 reset the interval):")
    for g in GRADES:
        print(f"  {g.grade}  {g.label:<13} {g.description}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='LeetRepeat -- spaced repetition for coding problems')
    parser.add_argument(
        '--db', default=None,
        help='Path to the problems JSONL file (default: $PROBLEMS_DB_PATH or data/problems.jsonl)',
    )
    parser.add_argument(
        '--backend', choices=['jsonl', 'sql'], default=None,
        help='Storage backend (default: $STORAGE_BACKEND or jsonl)',
    )
    parser.add_argument(
        '--log-level', default=os.environ.get('LOG_LEVEL', 'WARNING'),
        help='Logging level (default: $LOG_LEVEL or WARNING)',
    )
    subparsers = parser.add_subparsers(dest='command')

    add_parser = subparsers.add_parser('add', help='Track a new problem')
    add_parser.add_argument('url', help='Problem URL')
    add_parser.add_argument('--title', default=None, help='Override the title taken from the URL')

    subparsers.add_parser('list', help='Show due and upcoming problems')

    grade_parser = subparsers.add_parser('grade', help='Grade a problem 0-5')
    grade_parser.add_argument('problem_id', help='Problem ID')
    grade_parser.add_argument('grade', type=int, help='Grade 0-5')

    subparsers.add_parser('review', help='Grade due problems interactively')

    show_parser = subparsers.add_parser('show', help='Show problem details')
    show_parser.add_argument('problem_id', help='Problem ID to display')

    remove_parser = subparsers.add_parser('remove', help='Stop tracking a problem')
    remove_parser.add_argument('problem_id', help='Problem ID to remove')

    subparsers.add_parser('grades', help='Show the grading scale')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=Settings(log_level=args.log_level).log_level,
                        format='%(levelname)s %(name)s: %(message)s')

    if args.command == 'add':
        cmd_add(args)
    elif args.command == 'list':
        cmd_list(args)
    elif args.command == 'grade':
        cmd_grade(args)
    elif args.command == 'review':
        cmd_review(args)
    elif args.command == 'show':
        cmd_show(args)
    elif args.command == 'remove':
        cmd_remove(args)
    elif args.command == 'grades':
        cmd_grades(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()

"""JSONL-backed problem storage with per-record load/save."""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from practice.models import Problem, validate_state

logger = logging.getLogger("leetrepeat.storage")


class ProblemRepository(Protocol):
    """What the review service needs from a storage backend."""

    def get(self, problem_id: str) -> Optional[Problem]: ...

    def save(self, problem: Problem) -> None: ...

    def delete(self, problem_id: str) -> bool: ...

    def all(self) -> List[Problem]: ...

    def count(self) -> int: ...


class ProblemStore:
    """
    JSONL-backed problem storage.

    Loads the whole file into memory on init (fine for a personal problem
    list). Each mutation rewrites the file atomically (temp write + rename).
    Records keep insertion order, which is the order the queue shows due
    problems in.

    Lines that are not valid JSON are logged and kept verbatim at the end of
    the file on every rewrite, so a hand-edit gone wrong is never lost.
    """

    def __init__(self, db_path):
        self.db_path = Path(db_path)
        self._problems: Dict[str, Problem] = {}
        self._unparsed: List[str] = []
        self._lock = threading.Lock()
        self._load()

    def _load(self) -> None:
        if not self.db_path.exists():
            return
        with open(self.db_path, 'r', encoding='utf-8') as f:
            for lineno, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning("Skipping malformed line %d in %s: %s", lineno, self.db_path, e)
                    self._unparsed.append(line)
                    continue
                problem = Problem.from_dict(data)
                validate_state(problem.state)
                self._problems[problem.problem_id] = problem

    def _save(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.db_path.with_suffix(self.db_path.suffix + '.tmp')
        with open(tmp, 'w', encoding='utf-8') as f:
            for problem in self._problems.values():
                f.write(json.dumps(problem.to_dict(), ensure_ascii=False) + '\n')
            for line in self._unparsed:
                f.write(line + '\n')
        tmp.replace(self.db_path)

    def get(self, problem_id: str) -> Optional[Problem]:
        with self._lock:
            return self._problems.get(problem_id)

    def save(self, problem: Problem) -> None:
        """Insert or update a problem by problem_id. Memory is unchanged if the write fails."""
        validate_state(problem.state)
        with self._lock:
            previous = self._problems.get(problem.problem_id)
            self._problems[problem.problem_id] = problem
            try:
                self._save()
            except Exception:
                if previous is None:
                    del self._problems[problem.problem_id]
                else:
                    self._problems[problem.problem_id] = previous
                raise

    def delete(self, problem_id: str) -> bool:
        """Remove a problem. Returns False if it was not stored."""
        with self._lock:
            if problem_id not in self._problems:
                return False
            items = list(self._problems.items())
            problem = self._problems.pop(problem_id)
            try:
                self._save()
            except Exception:
                self._problems = dict(items)
                raise
        logger.debug("Deleted %s", problem.problem_id)
        return True

    def all(self) -> List[Problem]:
        with self._lock:
            return list(self._problems.values())

    def count(self) -> int:
        with self._lock:
            return len(self._problems)

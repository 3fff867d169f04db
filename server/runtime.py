from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from practice.storage import ProblemRepository, ProblemStore

if TYPE_CHECKING:
    from server.config import Settings

logger = logging.getLogger("leetrepeat")


def open_store(settings: "Settings") -> ProblemRepository:
    """Build the problem repository selected by settings.storage_backend."""
    if settings.storage_backend == "sql":
        from server.db.store import SqlProblemStore
        return SqlProblemStore(settings)
    return ProblemStore(settings.problems_db_path)


class Runtime:
   """
   Process-wide cache for the problem repository.

   The JSONL store loads its file once; the SQL store creates its tables
   once. Both are reused across requests.
   """

   def __init__(self, settings: "Settings"):
      self.settings = settings
      self._store_lock = threading.Lock()
      self._store: Optional[ProblemRepository] = None

   def get_store(self) -> ProblemRepository:
      if self._store is not None:
         return self._store
      with self._store_lock:
         if self._store is None:
               self._store = open_store(self.settings)
               logger.info("Opened %s problem store", self.settings.storage_backend)
      return self._store

   def reset_store(self) -> None:
      """Drop the cached store, e.g. after the file was replaced on disk."""
      with self._store_lock:
         self._store = None


def runtime_from_settings(settings: "Settings") -> Runtime:
    """Build Runtime from Settings. Used by get_runtime dependency."""
    return Runtime(settings)

"""Configuration for LeetRepeat (API server and CLI)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

STORAGE_BACKENDS = ("jsonl", "sql")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """
    Storage and logging settings.

    Defaults resolve relative to the project root or the environment.
    Every field is overridable at construction for testing.
    """
    data_dir: Optional[Path] = None
    problems_db_path: Optional[Path] = None
    storage_backend: Optional[str] = None
    database_url: Optional[str] = None
    log_level: Optional[str] = None

    def __post_init__(self):
        project_root = Path(__file__).resolve().parent.parent

        if self.data_dir is None:
            env_dir = os.environ.get("LEETREPEAT_DATA_DIR")
            self.data_dir = Path(env_dir) if env_dir else project_root / "data"
        self.data_dir = Path(self.data_dir)

        if self.problems_db_path is None:
            env_db = os.environ.get("PROBLEMS_DB_PATH")
            self.problems_db_path = Path(env_db) if env_db else self.data_dir / "problems.jsonl"
        self.problems_db_path = Path(self.problems_db_path)

        if self.storage_backend is None:
            self.storage_backend = os.environ.get("STORAGE_BACKEND", "jsonl")
        self.storage_backend = self.storage_backend.lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            self.storage_backend = "jsonl"

        if self.database_url is None:
            self.database_url = os.environ.get(
                "DATABASE_URL", f"sqlite:///{self.data_dir / 'leetrepeat.db'}"
            )

        if self.log_level is None:
            self.log_level = os.environ.get("LOG_LEVEL", "INFO")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            self.log_level = "INFO"

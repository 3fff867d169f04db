"""FastAPI dependency factories."""

from functools import lru_cache

from fastapi import Depends

from practice.storage import ProblemRepository
from server.config import Settings
from server.runtime import Runtime, runtime_from_settings

# Process-wide Runtime cache (keyed by settings identity for override support)
_runtime: Runtime | None = None
_runtime_settings_id: object | None = None


@lru_cache()
def get_settings() -> Settings:
    """Singleton Settings -- override via app.dependency_overrides in tests."""
    return Settings()


def get_runtime(settings: Settings = Depends(get_settings)) -> Runtime:
    """Process-wide Runtime cache for the problem store."""
    global _runtime, _runtime_settings_id
    # Recreate if settings were overridden (e.g. in tests)
    if _runtime is None or _runtime_settings_id is not settings:
        _runtime = runtime_from_settings(settings)
        _runtime_settings_id = settings
    return _runtime


def get_problem_store(runtime: Runtime = Depends(get_runtime)) -> ProblemRepository:
    """Cached problem repository from Runtime (process-wide)."""
    return runtime.get_store()

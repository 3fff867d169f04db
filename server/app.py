"""FastAPI application -- routes for the LeetRepeat review tracker."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from practice import service
from practice.labels import grades_as_dicts
from practice.scheduler import InvalidGradeError
from practice.storage import ProblemRepository
from server.__version__ import __version__
from server.config import Settings
from server.dependencies import get_problem_store, get_settings
from server.schemas import (
    AddProblemRequest,
    GradeRequest,
    GradesResponse,
    ProblemSummary,
    ProblemsResponse,
    QueueResponse,
    StatusResponse,
)

logger = logging.getLogger("leetrepeat")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    logging.basicConfig(level=settings.log_level)
    logger.info("Startup: storage=%s", settings.storage_backend)
    yield
    logger.info("Shutdown: complete")


app = FastAPI(title="LeetRepeat", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Health ----

@app.get("/health", response_model=StatusResponse)
def health(
    settings: Settings = Depends(get_settings),
    store: ProblemRepository = Depends(get_problem_store),
):
    return {
        'status': 'ok',
        'version': __version__,
        'storage_backend': settings.storage_backend,
        'problem_count': store.count(),
    }


# ---- Problems ----

@app.get("/problems", response_model=ProblemsResponse)
def list_problems(store: ProblemRepository = Depends(get_problem_store)):
    now = datetime.now()
    problems = store.all()
    return {
        'total': len(problems),
        'problems': [service.problem_summary(p, now) for p in problems],
    }


@app.post("/problems", response_model=ProblemSummary, status_code=201)
def add_problem(body: AddProblemRequest, store: ProblemRepository = Depends(get_problem_store)):
    now = datetime.now()
    try:
        problem = service.add_problem(store, body.url, now=now, title=body.title)
    except service.DuplicateProblemError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return service.problem_summary(problem, now)


@app.get("/problems/{problem_id}", response_model=ProblemSummary)
def get_problem(problem_id: str, store: ProblemRepository = Depends(get_problem_store)):
    try:
        problem = service.get_problem(store, problem_id)
    except service.ProblemNotFoundError:
        raise HTTPException(status_code=404, detail=f"Problem not found: {problem_id}")
    return service.problem_summary(problem, datetime.now())


@app.delete("/problems/{problem_id}", status_code=204)
def delete_problem(problem_id: str, store: ProblemRepository = Depends(get_problem_store)):
    try:
        service.remove_problem(store, problem_id)
    except service.ProblemNotFoundError:
        raise HTTPException(status_code=404, detail=f"Problem not found: {problem_id}")
    return Response(status_code=204)


@app.post("/problems/{problem_id}/grade", response_model=ProblemSummary)
def grade_problem(
    problem_id: str,
    body: GradeRequest,
    store: ProblemRepository = Depends(get_problem_store),
):
    now = datetime.now()
    try:
        problem = service.grade_problem(store, problem_id, body.grade, now=now)
    except service.ProblemNotFoundError:
        raise HTTPException(status_code=404, detail=f"Problem not found: {problem_id}")
    except InvalidGradeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception:
        logger.exception("Grading failed for problem %s", problem_id)
        raise
    return service.problem_summary(problem, now)


# ---- Queue ----

@app.get("/queue", response_model=QueueResponse)
def queue(store: ProblemRepository = Depends(get_problem_store)):
    return service.review_queue(store)


@app.get("/grades", response_model=GradesResponse)
def grades():
    return {'grades': grades_as_dicts()}

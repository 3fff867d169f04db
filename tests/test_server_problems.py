"""Tests for the problem and queue API endpoints."""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient
from server.app import app
from server.config import Settings
from server.dependencies import get_problem_store, get_settings
from practice.models import make_problem_id
from practice.storage import ProblemStore

TWO_SUM = 'https://leetcode.com/problems/two-sum/'


# ============================================================================
# Helpers
# ============================================================================

def _make_settings(tmp_dir: Path) -> Settings:
    return Settings(
        data_dir=tmp_dir,
        problems_db_path=tmp_dir / 'problems.jsonl',
        storage_backend='jsonl',
    )


def _client(settings: Settings) -> TestClient:
    store = ProblemStore(settings.problems_db_path)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_problem_store] = lambda: store
    return TestClient(app)


# ============================================================================
# Tests
# ============================================================================

def test_health():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            resp = client.get("/health")
            assert resp.status_code == 200
            body = resp.json()
            assert body['status'] == 'ok'
            assert body['storage_backend'] == 'jsonl'
            assert body['problem_count'] == 0
        finally:
            app.dependency_overrides.clear()


def test_add_and_get_problem():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            resp = client.post("/problems", json={"url": TWO_SUM})
            assert resp.status_code == 201
            body = resp.json()
            assert body['title'] == 'Two Sum'
            assert body['problem_id'] == make_problem_id(TWO_SUM)
            assert body['due_label'] == 'Today'
            assert body['last_reviewed_at'] is None

            resp = client.get(f"/problems/{body['problem_id']}")
            assert resp.status_code == 200
            assert resp.json()['url'] == 'https://leetcode.com/problems/two-sum'

            resp = client.get("/problems")
            assert resp.json()['total'] == 1
        finally:
            app.dependency_overrides.clear()


def test_add_duplicate_conflict():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            assert client.post("/problems", json={"url": TWO_SUM}).status_code == 201
            assert client.post("/problems", json={"url": TWO_SUM}).status_code == 409
        finally:
            app.dependency_overrides.clear()


def test_add_blank_url_rejected():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            assert client.post("/problems", json={"url": ""}).status_code == 422
            assert client.post("/problems", json={"url": "   "}).status_code == 422
        finally:
            app.dependency_overrides.clear()


def test_grade_problem():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            pid = client.post("/problems", json={"url": TWO_SUM}).json()['problem_id']
            resp = client.post(f"/problems/{pid}/grade", json={"grade": 5})
            assert resp.status_code == 200
            body = resp.json()
            assert body['repetition_count'] == 1
            assert body['interval_days'] == 1
            assert abs(body['easiness_factor'] - 2.6) < 1e-9
            assert body['due_label'] == 'Tomorrow'
            assert body['last_reviewed_at'] is not None
        finally:
            app.dependency_overrides.clear()


def test_grade_validation():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            pid = client.post("/problems", json={"url": TWO_SUM}).json()['problem_id']
            for bad in (-1, 6, 2.5, "3"):
                resp = client.post(f"/problems/{pid}/grade", json={"grade": bad})
                assert resp.status_code == 422, bad
        finally:
            app.dependency_overrides.clear()


def test_not_found():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            assert client.get("/problems/missing").status_code == 404
            assert client.delete("/problems/missing").status_code == 404
            resp = client.post("/problems/missing/grade", json={"grade": 3})
            assert resp.status_code == 404
        finally:
            app.dependency_overrides.clear()


def test_delete_problem():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            pid = client.post("/problems", json={"url": TWO_SUM}).json()['problem_id']
            assert client.delete(f"/problems/{pid}").status_code == 204
            assert client.get("/problems").json()['total'] == 0
        finally:
            app.dependency_overrides.clear()


def test_queue():
    with tempfile.TemporaryDirectory() as tmp:
        try:
            client = _client(_make_settings(Path(tmp)))
            a = client.post("/problems", json={"url": TWO_SUM}).json()['problem_id']
            b = client.post("/problems", json={
                "url": "https://leetcode.com/problems/lru-cache/",
                "title": "LRU Cache",
            }).json()['problem_id']
            client.post(f"/problems/{a}/grade", json={"grade": 4})

            resp = client.get("/queue")
            assert resp.status_code == 200
            body = resp.json()
            assert body['due_count'] == 1
            assert body['upcoming_count'] == 1
            assert body['total_problems'] == 2
            assert body['total_reviews'] == 1
            assert body['due'][0]['problem_id'] == b
            assert body['due'][0]['title'] == 'LRU Cache'
            assert body['upcoming'][0]['problem_id'] == a
        finally:
            app.dependency_overrides.clear()


def test_grades_scale():
    client = TestClient(app)
    resp = client.get("/grades")
    assert resp.status_code == 200
    grades = resp.json()['grades']
    assert [g['grade'] for g in grades] == [0, 1, 2, 3, 4, 5]
    assert grades[2]['label'] == 'Right Idea'

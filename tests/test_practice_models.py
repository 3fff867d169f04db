"""Tests for practice/models.py, practice/titles.py and practice/labels.py."""

import sys
from pathlib import Path
from datetime import datetime

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from practice.labels import GRADES, due_label, grade_info, grades_as_dicts
from practice.models import (
    InvalidStateError,
    Problem,
    ProblemMemoryState,
    make_problem_id,
    validate_state,
)
from practice.scheduler import InvalidGradeError
from practice.titles import FALLBACK_TITLE, extract_title, normalize_url

NOW = datetime(2024, 5, 1, 12, 0)


# ============================================================================
# Models
# ============================================================================

def test_new_problem_defaults():
    """A new problem starts at EF 2.5, reps 0, interval 1 and is due immediately."""
    p = Problem(problem_id='p', url='u', title='t', created_at=NOW)
    assert p.state.easiness_factor == 2.5
    assert p.state.repetition_count == 0
    assert p.state.interval_days == 1
    assert p.state.next_review_at == NOW
    assert p.state.last_reviewed_at is None


def test_problem_dict_round_trip():
    state = ProblemMemoryState(
        next_review_at=datetime(2024, 5, 7, 12, 0),
        easiness_factor=2.6,
        repetition_count=2,
        interval_days=6,
        last_reviewed_at=NOW,
    )
    p = Problem(problem_id='p', url='u', title='Two Sum', created_at=NOW, state=state)
    d = p.to_dict()
    assert d['state']['next_review_at'] == '2024-05-07T12:00:00'
    restored = Problem.from_dict(d)
    assert restored == p


def test_from_dict_ignores_unknown_keys():
    d = Problem(problem_id='p', url='u', title='t', created_at=NOW).to_dict()
    d['color'] = 'green'
    d['state']['label'] = 'Solved Easy'
    assert Problem.from_dict(d).problem_id == 'p'


def test_validate_state_accepts_defaults():
    validate_state(ProblemMemoryState.initial(NOW))


@pytest.mark.parametrize("field,value", [
    ('easiness_factor', 1.29),
    ('repetition_count', -1),
    ('interval_days', 0),
    ('interval_days', 1.5),
    ('repetition_count', True),
    ('easiness_factor', float('nan')),
    ('easiness_factor', float('inf')),
    ('easiness_factor', '2.5'),
    ('last_reviewed_at', '2024-05-01'),
])
def test_validate_state_rejects(field, value):
    state = ProblemMemoryState.initial(NOW)
    setattr(state, field, value)
    with pytest.raises(InvalidStateError):
        validate_state(state)


def test_problem_id_is_stable_across_url_variants():
    a = make_problem_id('https://leetcode.com/problems/two-sum/')
    b = make_problem_id('  https://leetcode.com/problems/two-sum?envType=daily#x ')
    c = make_problem_id('https://leetcode.com/problems/three-sum/')
    assert a == b
    assert a != c
    assert len(a) == 16


# ============================================================================
# Titles
# ============================================================================

def test_extract_title_from_slug():
    assert extract_title('https://leetcode.com/problems/two-sum/') == 'Two Sum'
    assert extract_title('https://leetcode.com/problems/lru-cache/description/') == 'Lru Cache'


def test_extract_title_fallback():
    assert extract_title('https://example.com/whatever') == FALLBACK_TITLE
    assert extract_title('') == FALLBACK_TITLE


def test_normalize_url():
    assert normalize_url(' https://leetcode.com/problems/two-sum/?q=1#a ') == \
        'https://leetcode.com/problems/two-sum'


# ============================================================================
# Labels
# ============================================================================

def test_due_label_today():
    assert due_label(datetime(2024, 5, 1, 23, 59), NOW) == 'Today'
    assert due_label(datetime(2024, 5, 1, 0, 0), NOW) == 'Today'


def test_due_label_tomorrow():
    assert due_label(datetime(2024, 5, 2, 0, 1), NOW) == 'Tomorrow'


def test_due_label_date():
    assert due_label(datetime(2024, 5, 9, 8, 0), NOW) == '2024-05-09'
    assert due_label(datetime(2024, 4, 30, 8, 0), NOW) == '2024-04-30'


def test_grade_scale():
    assert [g.grade for g in GRADES] == [0, 1, 2, 3, 4, 5]
    assert grade_info(0).label == 'No Clue'
    assert grade_info(5).label == 'Solved Easy'
    assert grades_as_dicts()[3]['label'] == 'Solved Hard'


def test_grade_info_rejects_out_of_range():
    with pytest.raises(InvalidGradeError):
        grade_info(6)

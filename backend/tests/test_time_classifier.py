"""Test wall-clock classification of scans."""
from datetime import datetime

import pytest

from scanroll.services.time_classifier import (
    AttendanceStatus, Classification, Period, TimeClassifier
)

MORNING, AFTERNOON = Period.MORNING, Period.AFTERNOON
PRESENT, LATE, ABSENT = AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT

def expected_for(hour):
    if hour < 8:
        return MORNING, PRESENT
    if hour < 10:
        return MORNING, LATE
    if hour < 12:
        return MORNING, ABSENT
    if hour < 14:
        return AFTERNOON, PRESENT
    if hour < 15:
        return AFTERNOON, LATE
    return AFTERNOON, ABSENT

def at(hour, minute=0):
    return datetime(2026, 10, 18, hour, minute)

@pytest.mark.parametrize('hour', range(24))
def test_every_hour_matches_table(hour):
    period, status = expected_for(hour)
    assert TimeClassifier.classify(at(hour)) == Classification(period, status)
    assert TimeClassifier.classify(at(hour, 59)) == Classification(period, status)

@pytest.mark.parametrize('hour, period, status', [
    (8, MORNING, LATE),
    (10, MORNING, ABSENT),
    (12, AFTERNOON, PRESENT),
    (14, AFTERNOON, LATE),
    (15, AFTERNOON, ABSENT),
])
def test_boundary_hour_belongs_to_later_bucket(hour, period, status):
    assert TimeClassifier.classify(at(hour)) == Classification(period, status)
    # one minute earlier is still the previous bucket
    before = TimeClassifier.classify(at(hour - 1, 59))
    assert before != Classification(period, status)

def test_midnight_is_morning_present():
    assert TimeClassifier.classify(at(0)) == Classification(MORNING, PRESENT)

def test_default_period_splits_at_noon():
    assert TimeClassifier.default_period(at(0)) is MORNING
    assert TimeClassifier.default_period(at(11, 59)) is MORNING
    assert TimeClassifier.default_period(at(12)) is AFTERNOON
    assert TimeClassifier.default_period(at(23, 59)) is AFTERNOON

def test_classification_serializes_to_values():
    assert TimeClassifier.classify(at(9)).to_dict() == {'period': 'morning', 'status': 'late'}

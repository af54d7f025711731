"""Test roster ownership checks."""
from scanroll.services.roster_guard import RosterGuard

def test_owned_student_is_verified(roster):
    assert RosterGuard(roster).verify_ownership('LRN001', 'T1') is True

def test_student_of_another_teacher_is_denied(roster):
    guard = RosterGuard(roster)
    assert guard.verify_ownership('LRN100', 'T1') is False
    assert guard.verify_ownership('LRN001', 'T2') is False

def test_unknown_student_is_denied(roster):
    assert RosterGuard(roster).verify_ownership('LRN999', 'T1') is False

def test_blank_identifiers_are_denied(roster):
    guard = RosterGuard(roster)
    assert guard.verify_ownership('', 'T1') is False
    assert guard.verify_ownership('LRN001', '') is False

def test_store_failure_fails_closed(roster, flaky_store):
    flaky_store.fail_reads = True
    assert RosterGuard(flaky_store).verify_ownership('LRN001', 'T1') is False

def test_duplicate_roster_entries_still_verify(roster):
    roster.create_record('students', {
        'name': 'Juan Dela Cruz',
        'student_id': 'LRN001',
        'section': 'Grade 4A',
        'teacher_id': 'T1',
    })
    assert RosterGuard(roster).verify_ownership('LRN001', 'T1') is True

"""Test auth events and the per-teacher context registry."""
import pytest

from scanroll.services.scan_session import ScanState
from scanroll.services.teacher_context import (
    AuthEvents, AuthSession, TeacherContextError, TeacherContextRegistry
)
from scanroll.services.document_store import SQLAlchemyDocumentStore

T1 = AuthSession(user_id='T1', email='t1@example.com', email_verified=True, name='Ana Reyes')

def test_subscribe_and_unsubscribe():
    events = AuthEvents()
    seen = []
    unsubscribe = events.subscribe(lambda user_id, session: seen.append((user_id, session)))

    events.signed_in(T1)
    assert events.current_user('T1') == T1
    events.signed_out('T1')
    assert events.current_user('T1') is None

    unsubscribe()
    events.signed_in(T1)

    assert seen == [('T1', T1), ('T1', None)]

@pytest.fixture
def events():
    return AuthEvents()

@pytest.fixture
def context_registry(app, events, clock):
    registry = TeacherContextRegistry(SQLAlchemyDocumentStore, events, clock=clock)
    yield registry
    registry.close()

def test_sign_in_builds_context_and_loads_ledger(roster, events, context_registry, clock):
    roster.create_record('attendance', {
        'student_id': 'LRN001',
        'teacher_id': 'T1',
        'date': '10/17/2026',
        'period': 'morning',
        'status': 'late',
        'scan_time': '08:15 AM',
        'timestamp': clock.now,
    })

    events.signed_in(T1)

    context = context_registry.get('T1')
    assert context.teacher_id == 'T1'
    assert [entry['student_id'] for entry in context.ledger.log] == ['LRN001']
    assert context.scan_session.state is ScanState.IDLE
    assert context.scan_session.ledger is context.ledger

def test_sign_out_drops_context(events, context_registry):
    events.signed_in(T1)
    assert 'T1' in context_registry

    events.signed_out('T1')

    assert 'T1' not in context_registry
    with pytest.raises(TeacherContextError):
        context_registry.get('T1')

def test_get_or_sign_in_replays_sign_in_once(events, context_registry):
    seen = []
    events.subscribe(lambda user_id, session: seen.append(user_id))

    first = context_registry.get_or_sign_in(T1)
    second = context_registry.get_or_sign_in(T1)

    assert first is second
    assert seen == ['T1']
    assert len(context_registry) == 1

def test_closed_registry_ignores_events(events, context_registry):
    context_registry.close()
    events.signed_in(T1)
    assert len(context_registry) == 0

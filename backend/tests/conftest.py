"""Shared fixtures for the scanroll test suite."""
from datetime import datetime, timezone

import pytest

from scanroll import create_app, db
from scanroll.models.user import User, UserRole
from scanroll.services.document_store import SQLAlchemyDocumentStore, StoreError

class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, hour: int, minute: int = 0) -> None:
        self.now = self.now.replace(hour=hour, minute=minute)

class FlakyStore:
    """Wraps a store and raises StoreError while a failure flag is set."""

    def __init__(self, inner):
        self.inner = inner
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def create_record(self, collection, fields):
        if self.fail_writes:
            raise StoreError("backend unavailable")
        self.writes += 1
        return self.inner.create_record(collection, fields)

    def query_documents(self, collection, filters, order_by=None, descending=False):
        if self.fail_reads:
            raise StoreError("backend unavailable")
        return self.inner.query_documents(collection, filters, order_by=order_by, descending=descending)

    def get_document(self, collection, id):
        if self.fail_reads:
            raise StoreError("backend unavailable")
        return self.inner.get_document(collection, id)

    def delete_document(self, collection, id):
        if self.fail_writes:
            raise StoreError("backend unavailable")
        return self.inner.delete_document(collection, id)

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def clock():
    """Sunday 18 October 2026, 07:30 UTC."""
    return FixedClock(datetime(2026, 10, 18, 7, 30, tzinfo=timezone.utc))

@pytest.fixture
def registry(app, clock):
    registry = app.extensions['scanroll']['registry']
    registry.clock = clock
    return registry

@pytest.fixture
def store(app):
    return SQLAlchemyDocumentStore()

@pytest.fixture
def flaky_store(store):
    return FlakyStore(store)

@pytest.fixture
def roster(store):
    """T1 owns LRN001 and LRN002; T2 owns LRN100."""
    for name, student_id, section, teacher_id in [
        ('Juan Dela Cruz', 'LRN001', 'Grade 4A', 'T1'),
        ('Maria Santos', 'LRN002', 'Grade 4A', 'T1'),
        ('Jose Rizal', 'LRN100', 'Grade 5B', 'T2'),
    ]:
        store.create_record('students', {
            'name': name,
            'student_id': student_id,
            'section': section,
            'teacher_id': teacher_id,
        })
    return store

def make_teacher(email: str, password: str = 'password123') -> User:
    user = User(
        email=email,
        first_name='Ana',
        last_name='Reyes',
        role=UserRole.TEACHER
    )
    user.set_password(password)
    return user.save()

def login(client, email: str, password: str = 'password123') -> dict:
    response = client.post('/api/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    token = response.get_json()['data']['access_token']
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def teacher(app):
    return make_teacher('teacher@example.com')

@pytest.fixture
def auth_headers(client, registry, teacher):
    return login(client, 'teacher@example.com')

"""Test authentication endpoints."""
import json

import pytest

from conftest import login
from scanroll import db
from scanroll.models.user import User

def test_health_check(client):
    """Test auth health endpoint."""
    response = client.get('/api/auth/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['message'] == 'Auth service is running'

def test_app_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'

def test_register_success(client):
    """Test successful teacher registration."""
    response = client.post('/api/auth/register',
        json={
            'email': 'NewTeacher@Example.com',
            'password': 'password123',
            'first_name': 'Maria',
            'middle_name': 'Luna',
            'last_name': 'Clara'
        })
    
    assert response.status_code == 201
    data = json.loads(response.data)
    assert data['error'] == False
    assert data['data']['email'] == 'newteacher@example.com'
    assert data['data']['full_name'] == 'Maria Luna Clara'
    assert data['data']['role'] == 'teacher'
    assert 'password_hash' not in data['data']

def test_register_validation(client):
    """Test registration validation."""
    # Missing fields
    response = client.post('/api/auth/register', json={})
    assert response.status_code == 400
    
    # Invalid email
    response = client.post('/api/auth/register',
        json={
            'email': 'invalid-email',
            'password': 'password123',
            'first_name': 'Maria',
            'last_name': 'Clara'
        })
    assert response.status_code == 400
    
    # Weak password
    response = client.post('/api/auth/register',
        json={
            'email': 'maria@example.com',
            'password': '123',
            'first_name': 'Maria',
            'last_name': 'Clara'
        })
    assert response.status_code == 400

def test_register_duplicate_email(client, teacher):
    response = client.post('/api/auth/register',
        json={
            'email': 'teacher@example.com',
            'password': 'password123',
            'first_name': 'Ana',
            'last_name': 'Reyes'
        })
    assert response.status_code == 409

def test_login_success_opens_attendance_context(app, client, registry, teacher):
    """Test successful login."""
    response = client.post('/api/auth/login',
        json={
            'email': 'teacher@example.com',
            'password': 'password123'
        })
    
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] == False
    assert 'access_token' in data['data']
    assert 'refresh_token' in data['data']
    assert data['data']['user']['email'] == 'teacher@example.com'
    assert teacher.uid in registry
    assert db.session.get(User, teacher.id).last_login is not None

def test_login_invalid_credentials(client, teacher):
    """Test login with invalid credentials."""
    response = client.post('/api/auth/login',
        json={
            'email': 'teacher@example.com',
            'password': 'wrongpassword'
        })
    
    assert response.status_code == 401

def test_get_current_user(client, auth_headers):
    """Test get current user profile."""
    response = client.get('/api/auth/me', headers=auth_headers)
    
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] == False
    assert data['data']['email'] == 'teacher@example.com'

def test_me_requires_token(client):
    response = client.get('/api/auth/me')
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Authorization token required'

def test_refresh_token(client, teacher):
    response = client.post('/api/auth/login',
        json={'email': 'teacher@example.com', 'password': 'password123'})
    refresh = response.get_json()['data']['refresh_token']
    
    response = client.post('/api/auth/refresh', headers={'Authorization': f'Bearer {refresh}'})
    assert response.status_code == 200
    assert 'access_token' in response.get_json()['data']

def test_logout_drops_attendance_context(client, registry, teacher):
    headers = login(client, 'teacher@example.com')
    assert teacher.uid in registry
    
    response = client.post('/api/auth/logout', headers=headers)
    
    assert response.status_code == 200
    assert teacher.uid not in registry

@pytest.mark.parametrize('body', [
    ['teacher@example.com', 'password123'],
    {'email': 42, 'password': 'password123'},
    {'email': 'teacher@example.com', 'password': ['password123']},
])
def test_login_rejects_malformed_bodies(client, teacher, body):
    response = client.post('/api/auth/login', json=body)
    assert response.status_code == 400

def test_register_rejects_non_text_fields(client):
    response = client.post('/api/auth/register', json={
        'email': 'new@example.com',
        'password': 'password123',
        'first_name': 'Ana',
        'last_name': 'Reyes',
        'department': 7
    })
    
    assert response.status_code == 400
    assert response.get_json()['message'] == 'department must be text'

"""Tests for configuration selection and startup checks."""
import pytest

from config import config_problems, get_config, DevelopmentConfig, ProductionConfig, TestingConfig
from scanroll import create_app

def test_get_config_by_name(monkeypatch):
    monkeypatch.delenv('SCANROLL_ENV', raising=False)
    monkeypatch.delenv('FLASK_ENV', raising=False)
    
    assert get_config('testing') is TestingConfig
    assert get_config('production') is ProductionConfig
    assert get_config('staging') is DevelopmentConfig
    assert get_config() is DevelopmentConfig

def test_get_config_from_environment(monkeypatch):
    monkeypatch.setenv('FLASK_ENV', 'production')
    assert get_config() is ProductionConfig
    
    monkeypatch.setenv('SCANROLL_ENV', 'testing')
    assert get_config() is TestingConfig

def test_production_requires_secrets():
    problems = config_problems({'DEBUG': False, 'TESTING': False, 'SECRET_KEY': 'x'})
    
    assert "JWT_SECRET_KEY must be set" in problems
    assert "SQLALCHEMY_DATABASE_URI must be set" in problems
    assert "SECRET_KEY must be set" not in problems

def test_qr_settings_are_checked():
    problems = config_problems({'TESTING': True, 'QR_BOX_SIZE': 0, 'QR_BORDER': -1})
    
    assert problems == [
        "QR_BOX_SIZE must be a positive integer",
        "QR_BORDER must be a non-negative integer"
    ]

def test_testing_config_is_valid():
    assert config_problems({k: getattr(TestingConfig, k) for k in dir(TestingConfig) if k.isupper()}) == []

def test_unknown_school_timezone_fails_startup(monkeypatch):
    monkeypatch.setattr(TestingConfig, 'SCHOOL_TIMEZONE', 'Mars/Olympus_Mons')
    
    with pytest.raises(ValueError):
        create_app('testing')

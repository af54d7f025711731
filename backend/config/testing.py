"""Testing configuration."""
from datetime import timedelta

class TestingConfig:
    """Testing configuration class."""
    
    # Basic Flask config
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    
    # Database (in-memory SQLite for testing)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # JWT Configuration
    JWT_SECRET_KEY = 'test-jwt-secret-with-enough-length-for-hs256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=5)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(hours=1)
    
    CORS_ORIGINS = ["*"]
    
    # Rate Limiting (disabled for testing)
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = 'memory://'
    
    # Attendance clock
    SCHOOL_TIMEZONE = 'UTC'
    
    # QR rendering (small images keep tests fast)
    QR_BOX_SIZE = 2
    QR_BORDER = 1
    
    # Logging
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None

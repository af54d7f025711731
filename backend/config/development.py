"""Development configuration."""
import os
from datetime import timedelta

class DevelopmentConfig:
    """Development configuration class."""
    
    # Basic Flask config
    DEBUG = True
    TESTING = False
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DEV_DATABASE_URL', 'sqlite:///scanroll_dev.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=8)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=7)
    
    # CORS
    CORS_ORIGINS = ["http://localhost:*", "http://127.0.0.1:*"]
    
    # Rate Limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = "1000 per day, 200 per hour"
    
    # Attendance clock (IANA zone of the classroom)
    SCHOOL_TIMEZONE = os.getenv('SCHOOL_TIMEZONE', 'UTC')
    
    # QR rendering
    QR_BOX_SIZE = 10
    QR_BORDER = 4
    
    # Logging
    LOG_LEVEL = 'DEBUG'
    LOG_FILE = 'logs/scanroll.log'

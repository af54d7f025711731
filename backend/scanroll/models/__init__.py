"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .student import Student
from .attendance import AttendanceRecord

__all__ = [
    'BaseModel', 'User', 'UserRole',
    'Student', 'AttendanceRecord'
]

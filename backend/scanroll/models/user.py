"""Teacher account and profile model."""
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash
from scanroll import db
from scanroll.models.base import BaseModel

class UserRole(Enum):
    """User roles enumeration."""
    TEACHER = 'teacher'
    ADMIN = 'admin'

class User(BaseModel):
    """Signed-in user of the scanner; every user owns a roster."""
    
    __tablename__ = 'users'
    
    # Basic Information
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    middle_name = db.Column(db.String(100), nullable=False, default='')
    last_name = db.Column(db.String(100), nullable=False)
    department = db.Column(db.String(150), nullable=True)
    
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.TEACHER)
    
    # Account state
    email_verified = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)
    
    @property
    def uid(self) -> str:
        """Opaque identifier handed to the attendance engine and JWTs."""
        return str(self.id)
    
    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return ' '.join(part for part in parts if part)
    
    def set_password(self, password: str) -> None:
        """Set user password with hashing."""
        self.password_hash = generate_password_hash(password)
    
    def check_password(self, password: str) -> bool:
        """Check if provided password matches user's password."""
        return check_password_hash(self.password_hash, password)
    
    def to_dict(self, exclude: list = None) -> dict:
        """Convert to dictionary excluding sensitive data."""
        exclude = (exclude or []) + ['password_hash']
        
        result = super().to_dict(exclude=exclude)
        result['role'] = self.role.value if self.role else None
        result['full_name'] = self.full_name
        
        return result
    
    def __repr__(self) -> str:
        return f'<User {self.email}>'

"""Base model class with common functionality."""
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from scanroll import db

def utcnow() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from backends without tz support."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

class BaseModel(db.Model):
    """Base model class with common fields and methods."""
    
    __abstract__ = True
    
    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    
    def save(self) -> 'BaseModel':
        """Save instance to database."""
        db.session.add(self)
        db.session.commit()
        return self
    
    def delete(self) -> None:
        """Delete instance from database."""
        db.session.delete(self)
        db.session.commit()
    
    def to_dict(self, exclude: list = None) -> Dict[str, Any]:
        """Convert instance to dictionary."""
        exclude = exclude or []
        result = {}
        
        for column in self.__table__.columns:
            key = column.name
            if key not in exclude:
                value = getattr(self, key)
                if isinstance(value, datetime):
                    value = as_utc(value).isoformat()
                result[key] = value
        
        return result
    
    def to_document(self) -> Dict[str, Any]:
        """Document view used by the document store."""
        return self.to_dict(exclude=['created_at'])
    
    @classmethod
    def get_by_id(cls, id: int) -> Optional['BaseModel']:
        """Get instance by ID."""
        return db.session.get(cls, id)
    
    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.id}>'

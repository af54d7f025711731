"""Validation utilities for the application."""
import re
from enum import Enum
from typing import Dict, List, Any, Optional, Type

class Validator:
    """Validation helper class."""
    
    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email.strip()))
    
    @staticmethod
    def validate_password(password: str) -> Dict[str, Any]:
        """Validate password strength."""
        errors = []
        
        if not password:
            errors.append("Password is required")
        elif len(password) < 6:
            errors.append("Password is too weak. Please use at least 6 characters.")
        elif len(password) > 128:
            errors.append("Password is too long")
        
        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
    
    @staticmethod
    def validate_name(name: str) -> Dict[str, Any]:
        """Validate a person's name."""
        errors = []
        
        if not name or not name.strip():
            errors.append("Name is required")
        elif len(name.strip()) > 100:
            errors.append("Name is too long")
        
        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
    
    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []
        
        for field in required_fields:
            if field not in data or not data[field]:
                errors.append(f"{field.replace('_', ' ').capitalize()} is required")
        
        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
    
    @staticmethod
    def parse_choice(value: Any, choices: Type[Enum]) -> Optional[Enum]:
        """Enum member for a case-insensitive value, or None."""
        if not isinstance(value, str):
            return None
        try:
            return choices(value.strip().lower())
        except ValueError:
            return None
    
    @staticmethod
    def non_text_fields(data: Dict, fields: List[str]) -> List[str]:
        """Fields present in ``data`` whose value is not a string."""
        return [
            field for field in fields
            if data.get(field) is not None and not isinstance(data[field], str)
        ]

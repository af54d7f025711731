"""Authentication service for teacher accounts."""
import logging
from typing import Optional, Tuple
from flask_jwt_extended import create_access_token, create_refresh_token
from scanroll import db
from scanroll.models.base import utcnow
from scanroll.models.user import User, UserRole
from scanroll.services.teacher_context import AuthEvents, AuthSession
from scanroll.utils.validators import Validator

logger = logging.getLogger(__name__)

class AuthService:
    @staticmethod
    def get_user(user_id) -> Optional[User]:
        """Get user by the opaque id carried in tokens."""
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None
    
    @staticmethod
    def register(
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        middle_name: str = '',
        department: str = None
    ) -> Tuple[Optional[dict], Optional[str]]:
        """Register a new teacher account."""
        email = (email or '').lower().strip()
        if not Validator.validate_email(email):
            return None, "Invalid email address."
        
        password_check = Validator.validate_password(password)
        if not password_check['is_valid']:
            return None, password_check['errors'][0]
        
        for label, value in (('First name', first_name), ('Last name', last_name)):
            name_check = Validator.validate_name(value)
            if not name_check['is_valid']:
                return None, f"{label}: {name_check['errors'][0]}"
        
        if User.query.filter_by(email=email).first():
            return None, "This email is already registered. Please login instead."
        
        user = User(
            email=email,
            first_name=first_name.strip(),
            middle_name=(middle_name or '').strip(),
            last_name=last_name.strip(),
            department=department,
            role=UserRole.TEACHER
        )
        user.set_password(password)
        user.save()
        logger.info("Registered teacher account %s", user.uid)
        
        return user.to_dict(), None
    
    @staticmethod
    def login(email: str, password: str, events: AuthEvents) -> Tuple[Optional[dict], Optional[str]]:
        """Authenticate a teacher, issue tokens and announce the sign-in."""
        if not email or not password:
            return None, "Email and password are required"
        
        if not Validator.validate_email(email):
            return None, "Invalid email address."
        
        user = User.query.filter_by(email=email.lower().strip()).first()
        if not user or not user.check_password(password):
            return None, "Invalid email or password."
        
        if not user.is_active:
            return None, "Account is deactivated"
        
        user.last_login = utcnow()
        user.save()
        
        events.signed_in(AuthSession.from_user(user))
        
        return {
            "access_token": create_access_token(identity=user.uid),
            "refresh_token": create_refresh_token(identity=user.uid),
            "user": user.to_dict()
        }, None
    
    @staticmethod
    def logout(user_id: str, events: AuthEvents) -> None:
        """Announce the sign-out so the teacher's attendance context is dropped."""
        events.signed_out(user_id)
    
    @staticmethod
    def refresh_token(user_id: str) -> Tuple[Optional[dict], Optional[str]]:
        """Generate new access token."""
        user = AuthService.get_user(user_id)
        if not user or not user.is_active:
            return None, "User not found or inactive"
        
        return {
            "access_token": create_access_token(identity=user.uid),
            "user": user.to_dict()
        }, None

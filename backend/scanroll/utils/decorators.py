"""Custom decorators for authorization."""
from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt_identity
from scanroll import attendance_registry
from scanroll.models.user import UserRole
from scanroll.services.auth_service import AuthService
from scanroll.services.teacher_context import AuthSession
from scanroll.utils.helpers import error_response

def teacher_required(f):
    """Decorator to require a teacher and bind their attendance context.
    
    Must sit below ``@jwt_required()``. Sets ``g.current_user`` and
    ``g.teacher_context``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = AuthService.get_user(get_jwt_identity())
        
        if not user:
            return error_response("User not found", 404)
        
        if not user.is_active:
            return error_response("Account is deactivated", 403)
        
        if user.role not in (UserRole.TEACHER, UserRole.ADMIN):
            return error_response("Teacher access required", 403)
        
        g.current_user = user
        g.teacher_context = attendance_registry().get_or_sign_in(AuthSession.from_user(user))
        
        return f(*args, **kwargs)
    return decorated_function

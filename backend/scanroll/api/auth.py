"""Authentication API for teacher accounts."""
from flask import Blueprint
from flask_jwt_extended import jwt_required, get_jwt_identity
from scanroll import auth_events, limiter
from scanroll.services.auth_service import AuthService
from scanroll.utils.helpers import success_response, error_response, json_object
from scanroll.utils.validators import Validator

auth_bp = Blueprint("auth", __name__)

@auth_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return success_response(message="Auth service is running")

@auth_bp.route("/register", methods=["POST"])
@limiter.limit("10 per hour")
def register():
    """Register a teacher account."""
    data = json_object()
    if not data:
        return error_response("Request body must be a JSON object", 400)
    
    check = Validator.validate_required_fields(
        data, ["email", "password", "first_name", "last_name"]
    )
    if not check["is_valid"]:
        return error_response(check["errors"][0], 400)
    
    invalid = Validator.non_text_fields(
        data, ["email", "password", "first_name", "last_name", "middle_name", "department"]
    )
    if invalid:
        return error_response(f"{invalid[0]} must be text", 400)
    
    user, error = AuthService.register(
        email=data["email"],
        password=data["password"],
        first_name=data["first_name"],
        last_name=data["last_name"],
        middle_name=data.get("middle_name", ""),
        department=data.get("department")
    )
    if error:
        status = 409 if "already registered" in error else 400
        return error_response(error, status)
    
    return success_response(data=user, message="Registration successful", status_code=201)

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Teacher login; loads the teacher's attendance log."""
    data = json_object()
    if not data:
        return error_response("Request body must be a JSON object", 400)
    
    if Validator.non_text_fields(data, ["email", "password"]):
        return error_response("Email and password must be text", 400)
    
    email = (data.get("email") or "").strip()
    password = data.get("password") or ""
    
    if not email or not password:
        return error_response("Email and password are required", 400)
    
    result, error = AuthService.login(email, password, auth_events())
    if error:
        return error_response(error, 401)
    
    return success_response(data=result, message="Login successful")

@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    """Drop the teacher's attendance context and any pending scan."""
    AuthService.logout(get_jwt_identity(), auth_events())
    return success_response(message="Logged out")

@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def get_current_user():
    """Get current user profile."""
    user = AuthService.get_user(get_jwt_identity())
    if not user:
        return error_response("User not found", 404)
    
    return success_response(data=user.to_dict())

@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh_token():
    """Refresh access token."""
    result, error = AuthService.refresh_token(get_jwt_identity())
    if error:
        return error_response(error, 401)
    
    return success_response(data=result, message="Token refreshed")

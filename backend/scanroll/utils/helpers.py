"""JSON envelope helpers shared by the API blueprints."""
from flask import jsonify, request
from typing import Any, Optional
from scanroll.services.scan_session import ScanError

# HTTP status for each recoverable scanner outcome
SCAN_ERROR_STATUS = {
    ScanError.UNRECOGNIZED_PAYLOAD: 400,
    ScanError.ACCESS_DENIED: 403,
    ScanError.SCAN_IN_PROGRESS: 409,
    ScanError.NOTHING_PENDING: 409,
    ScanError.RECORD_FAILED: 503,
}

def json_object():
    """Request body when it is a JSON object, otherwise None."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None

def handle_error(error, status_code: int):
    """Envelope for exceptions caught by the app-level error handlers."""
    message = getattr(error, 'description', None) or str(error)
    return error_response(message, status_code)

def success_response(data: Any = None, message: str = "Success", status_code: int = 200):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }

    if data is not None:
        response['data'] = data

    return jsonify(response), status_code

def error_response(message: str, status_code: int = 400, code: Optional[str] = None):
    """Return consistent error response.

    ``code`` is a stable machine-readable name clients can branch on
    instead of the display message.
    """
    response = {
        'error': True,
        'message': message,
        'status_code': status_code
    }
    if code:
        response['code'] = code

    return jsonify(response), status_code

def scan_error_response(error: ScanError):
    """Envelope for a ScanError, e.g. ``access_denied`` with 403."""
    return error_response(error.message, SCAN_ERROR_STATUS[error], code=error.name.lower())

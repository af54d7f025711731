"""Scanner API: one pending scan per signed-in teacher."""
from flask import Blueprint, g
from flask_jwt_extended import jwt_required
from scanroll.services.scan_session import ScanError
from scanroll.services.time_classifier import AttendanceStatus
from scanroll.utils.decorators import teacher_required
from scanroll.utils.helpers import success_response, error_response, json_object, scan_error_response
from scanroll.utils.validators import Validator

scan_bp = Blueprint('scan', __name__)

@scan_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def scan_state():
    """Current scanner state and pending decision."""
    return success_response(data=g.teacher_context.scan_session.to_dict())

@scan_bp.route('', methods=['POST'])
@jwt_required()
@teacher_required
def scan():
    """Submit a decoded QR payload."""
    data = json_object()
    if data is None or data.get('payload') is None:
        return error_response("Missing required field: payload", 400)
    
    decision, error = g.teacher_context.scan_session.on_scan(data['payload'])
    if error:
        return scan_error_response(error)
    
    return success_response(data=decision.to_dict(), message="Scan verified. Confirm to record attendance")

@scan_bp.route('/override', methods=['POST'])
@jwt_required()
@teacher_required
def override():
    """Change the pending status (present, late or absent)."""
    data = json_object() or {}
    status = Validator.parse_choice(data.get('status'), AttendanceStatus)
    if status is None:
        return error_response("Status must be one of: present, late, absent", 400)
    
    decision, error = g.teacher_context.scan_session.override(status)
    if error:
        return scan_error_response(error)
    
    return success_response(data=decision.to_dict(), message="Status updated")

@scan_bp.route('/confirm', methods=['POST'])
@jwt_required()
@teacher_required
def confirm():
    """Record the pending decision."""
    session = g.teacher_context.scan_session
    decision = session.pending
    
    record_id, error = session.confirm()
    if error:
        return scan_error_response(error)
    
    return success_response(
        data={
            'record_id': record_id,
            'student': decision.student.to_dict(),
            'period': decision.period.value,
            'status': decision.status.value,
            'scan_time': decision.scan_time
        },
        message=f"{decision.period.value.capitalize()} attendance recorded",
        status_code=201
    )

@scan_bp.route('/cancel', methods=['POST'])
@jwt_required()
@teacher_required
def cancel():
    """Discard the pending decision without recording."""
    if not g.teacher_context.scan_session.cancel():
        return scan_error_response(ScanError.NOTHING_PENDING)
    
    return success_response(message="Scan cancelled")

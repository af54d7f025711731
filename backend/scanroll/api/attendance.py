"""Attendance log and daily statistics API."""
from datetime import date
from flask import Blueprint, g, request
from flask_jwt_extended import jwt_required
from scanroll.services.time_classifier import Period, TimeClassifier
from scanroll.utils.decorators import teacher_required
from scanroll.utils.helpers import success_response, error_response, json_object
from scanroll.utils.validators import Validator

attendance_bp = Blueprint('attendance', __name__)

def _date_arg():
    """Parse the ``date`` query argument (YYYY-MM-DD)."""
    value = request.args.get('date')
    if not value:
        return None, "Missing query parameter: date"
    try:
        return date.fromisoformat(value), None
    except ValueError:
        return None, "Date must use the YYYY-MM-DD format"

def _manual_entry(record):
    """Shared body handling for manual absence entries."""
    data = json_object()
    if data is None:
        return error_response("Request body must be a JSON object", 400)
    
    student_id = data.get('student_id')
    if student_id is not None and not isinstance(student_id, str):
        return error_response("student_id must be text", 400)
    student_id = (student_id or '').strip()
    if not student_id:
        return error_response("Missing required field: student_id", 400)
    
    period = None
    if data.get('period') is not None:
        period = Validator.parse_choice(data['period'], Period)
        if period is None:
            return error_response("Period must be morning or afternoon", 400)
    
    guard = g.teacher_context.guard
    if not guard.verify_ownership(student_id, g.teacher_context.teacher_id):
        return error_response("This student does not belong to your class", 403)
    
    _, error = record(student_id, period)
    if error:
        return error_response(error, 503)
    
    return success_response(
        data=g.teacher_context.ledger.log[0],
        message="Attendance updated",
        status_code=201
    )

@attendance_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Attendance service is running')

@attendance_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def get_log():
    """The teacher's attendance log, newest first."""
    ledger = g.teacher_context.ledger
    return success_response(data={
        'records': ledger.log,
        'total': len(ledger.log),
        'loading': ledger.loading,
        'last_error': ledger.last_error
    })

@attendance_bp.route('/reload', methods=['POST'])
@jwt_required()
@teacher_required
def reload_log():
    """Rebuild the log from the store."""
    ledger = g.teacher_context.ledger
    if not ledger.load_all():
        return error_response(ledger.last_error or "Failed to load attendance", 503)
    
    return success_response(data={'total': len(ledger.log)}, message="Attendance reloaded")

@attendance_bp.route('/stats/today', methods=['GET'])
@jwt_required()
@teacher_required
def stats_today():
    """Today's present/late/absent counts per period."""
    return success_response(data=g.teacher_context.ledger.stats_for_today().to_dict())

@attendance_bp.route('/stats', methods=['GET'])
@jwt_required()
@teacher_required
def stats_for_date():
    """Counts for the day given as ``?date=YYYY-MM-DD``."""
    day, error = _date_arg()
    if error:
        return error_response(error, 400)
    
    return success_response(data=g.teacher_context.ledger.stats_for_date(day).to_dict())

@attendance_bp.route('/by-date', methods=['GET'])
@jwt_required()
@teacher_required
def records_for_date():
    """Records written on the day given as ``?date=YYYY-MM-DD``."""
    day, error = _date_arg()
    if error:
        return error_response(error, 400)
    
    records = g.teacher_context.ledger.records_for_date(day)
    return success_response(data={'records': records, 'total': len(records)})

@attendance_bp.route('/period', methods=['GET'])
@jwt_required()
@teacher_required
def current_period():
    """Current session and the status a scan would get right now."""
    ledger = g.teacher_context.ledger
    now = ledger.local_now()
    return success_response(data={
        'period': ledger.current_period().value,
        'classification': TimeClassifier.classify(now).to_dict(),
        'local_time': now.isoformat()
    })

@attendance_bp.route('/absence', methods=['POST'])
@jwt_required()
@teacher_required
def mark_absent():
    """Manually mark a student absent (period defaults to the current one)."""
    return _manual_entry(g.teacher_context.ledger.mark_absent)

@attendance_bp.route('/absence/remove', methods=['POST'])
@jwt_required()
@teacher_required
def remove_absence():
    """Correct an absence by recording the student present."""
    return _manual_entry(g.teacher_context.ledger.remove_absence)

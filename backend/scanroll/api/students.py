"""Roster management API for the signed-in teacher."""
from flask import Blueprint, current_app, g
from flask_jwt_extended import jwt_required
from scanroll.services.student_service import (
    INVALID_FIELDS, MISSING_FIELDS, STUDENT_NOT_FOUND, StudentService
)
from scanroll.utils.decorators import teacher_required
from scanroll.utils.helpers import success_response, error_response, json_object

students_bp = Blueprint('students', __name__)

@students_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Students service is running')

@students_bp.route('', methods=['GET'])
@jwt_required()
@teacher_required
def get_students():
    """List the teacher's students, also grouped by section."""
    store = g.teacher_context.guard.store
    students, error = StudentService.list_students(store, g.teacher_context.teacher_id)
    if error:
        return error_response(error, 503)
    
    return success_response(data={
        'students': students,
        'sections': StudentService.group_by_section(students),
        'total': len(students)
    })

@students_bp.route('', methods=['POST'])
@jwt_required()
@teacher_required
def add_student():
    """Add a student to the teacher's roster."""
    data = json_object()
    if data is None:
        return error_response("Request body must be a JSON object", 400)
    
    store = g.teacher_context.guard.store
    
    student, error = StudentService.add_student(
        store,
        g.teacher_context.teacher_id,
        name=data.get('name'),
        student_id=data.get('student_id'),
        section=data.get('section')
    )
    if error:
        if error in (MISSING_FIELDS, INVALID_FIELDS):
            return error_response(error, 400)
        if error.startswith("Failed"):
            return error_response(error, 503)
        return error_response(error, 409)
    
    return success_response(data=student, message=f"{student['name']} added successfully!", status_code=201)

@students_bp.route('/<int:doc_id>', methods=['DELETE'])
@jwt_required()
@teacher_required
def delete_student(doc_id):
    """Remove a student from the roster."""
    store = g.teacher_context.guard.store
    deleted, error = StudentService.delete_student(store, g.teacher_context.teacher_id, doc_id)
    if not deleted:
        return error_response(error, 404 if error == STUDENT_NOT_FOUND else 503)
    
    return success_response(message='Student deleted successfully')

@students_bp.route('/<int:doc_id>/qr', methods=['GET'])
@jwt_required()
@teacher_required
def student_qr(doc_id):
    """QR payload and image for one student."""
    store = g.teacher_context.guard.store
    result, error = StudentService.student_qr(
        store,
        g.teacher_context.teacher_id,
        doc_id,
        box_size=current_app.config.get('QR_BOX_SIZE', 10),
        border=current_app.config.get('QR_BORDER', 4)
    )
    if error:
        return error_response(error, 404 if error == STUDENT_NOT_FOUND else 503)
    
    return success_response(data=result)

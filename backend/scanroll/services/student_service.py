"""Roster management for a teacher's students."""
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple
from scanroll.services.document_store import DocumentStore, StoreError
from scanroll.services.qr_service import QRService

logger = logging.getLogger(__name__)

STUDENTS_COLLECTION = 'students'

MISSING_FIELDS = "Please fill in all fields"
INVALID_FIELDS = "Name, student ID and section must be text"
STUDENT_NOT_FOUND = "Student not found"
DUPLICATE_STUDENT = "Student ID {} is already on your roster"

class StudentService:
    """Service for managing a teacher's roster."""
    
    @staticmethod
    def add_student(
        store: DocumentStore,
        teacher_id: str,
        name: str,
        student_id: str,
        section: str
    ) -> Tuple[Optional[Dict], Optional[str]]:
        """Add a student to the teacher's roster."""
        if any(value is not None and not isinstance(value, str) for value in (name, student_id, section)):
            return None, INVALID_FIELDS
        
        name = (name or '').strip()
        student_id = (student_id or '').strip()
        section = (section or '').strip()
        if not name or not student_id or not section:
            return None, MISSING_FIELDS
        
        try:
            existing = store.query_documents(
                STUDENTS_COLLECTION,
                {'student_id': student_id, 'teacher_id': teacher_id}
            )
            if existing:
                return None, DUPLICATE_STUDENT.format(student_id)
            
            doc_id = store.create_record(STUDENTS_COLLECTION, {
                'name': name,
                'student_id': student_id,
                'section': section,
                'teacher_id': teacher_id,
            })
            student = store.get_document(STUDENTS_COLLECTION, doc_id)
        except StoreError as e:
            return None, f"Failed to add student: {str(e)}"
        
        logger.info("Teacher %s added student %s", teacher_id, student_id)
        return student, None
    
    @staticmethod
    def list_students(store: DocumentStore, teacher_id: str) -> Tuple[Optional[List[Dict]], Optional[str]]:
        """All students owned by the teacher."""
        try:
            students = store.query_documents(
                STUDENTS_COLLECTION,
                {'teacher_id': teacher_id},
                order_by='name'
            )
        except StoreError as e:
            return None, f"Failed to load students: {str(e)}"
        return students, None
    
    @staticmethod
    def group_by_section(students: List[Dict]) -> Dict[str, List[Dict]]:
        """Group roster documents by section, keeping roster order."""
        grouped = OrderedDict()
        for student in students:
            section = student.get('section') or 'No Section'
            grouped.setdefault(section, []).append(student)
        return grouped
    
    @staticmethod
    def _owned(store: DocumentStore, teacher_id: str, doc_id) -> Optional[Dict]:
        student = store.get_document(STUDENTS_COLLECTION, doc_id)
        if student is None or student.get('teacher_id') != teacher_id:
            return None
        return student
    
    @staticmethod
    def delete_student(store: DocumentStore, teacher_id: str, doc_id) -> Tuple[bool, Optional[str]]:
        """Remove a student from the roster; past attendance records stay."""
        try:
            student = StudentService._owned(store, teacher_id, doc_id)
            if student is None:
                return False, STUDENT_NOT_FOUND
            store.delete_document(STUDENTS_COLLECTION, doc_id)
        except StoreError as e:
            return False, f"Failed to delete student: {str(e)}"
        
        logger.info("Teacher %s removed student %s", teacher_id, student['student_id'])
        return True, None
    
    @staticmethod
    def student_qr(
        store: DocumentStore,
        teacher_id: str,
        doc_id,
        box_size: int = 10,
        border: int = 4
    ) -> Tuple[Optional[Dict], Optional[str]]:
        """Payload text and rendered QR image for one of the teacher's students."""
        try:
            student = StudentService._owned(store, teacher_id, doc_id)
        except StoreError as e:
            return None, f"Failed to load student: {str(e)}"
        if student is None:
            return None, STUDENT_NOT_FOUND
        
        payload = QRService.build_payload(student)
        return {
            'student': student,
            'payload': payload,
            'qr_image': QRService.render_image(payload, box_size=box_size, border=border)
        }, None

"""Roster entry owned by a single teacher."""
from scanroll import db
from scanroll.models.base import BaseModel

class Student(BaseModel):
    """Student on a teacher's roster.
    
    ``student_id`` is the LRN or school number printed on the QR code. It is
    only unique within one teacher's roster, so lookups always filter on
    ``teacher_id`` as well.
    """
    
    __tablename__ = 'students'
    __table_args__ = (
        db.Index('ix_students_teacher_student', 'teacher_id', 'student_id'),
    )
    
    student_id = db.Column(db.String(50), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    section = db.Column(db.String(100), nullable=False)
    teacher_id = db.Column(db.String(64), nullable=False, index=True)
    
    def __repr__(self):
        return f'<Student {self.student_id} of {self.teacher_id}>'

"""Append-only attendance record."""
from scanroll import db
from scanroll.models.base import BaseModel, as_utc

class AttendanceRecord(BaseModel):
    """One scan or manual entry; never updated after insert."""
    
    __tablename__ = 'attendance_records'
    
    student_id = db.Column(db.String(50), nullable=False, index=True)
    teacher_id = db.Column(db.String(64), nullable=False, index=True)
    
    # Teacher-local calendar day (M/D/YYYY) and clock (hh:MM AM) at recording
    date = db.Column(db.String(10), nullable=False, index=True)
    scan_time = db.Column(db.String(16), nullable=False)
    
    period = db.Column(db.String(16), nullable=False)  # morning, afternoon
    status = db.Column(db.String(16), nullable=False)  # present, late, absent
    
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    
    def to_document(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'teacher_id': self.teacher_id,
            'date': self.date,
            'period': self.period,
            'status': self.status,
            'scan_time': self.scan_time,
            'timestamp': as_utc(self.timestamp).isoformat(),
        }
    
    def __repr__(self):
        return f'<AttendanceRecord {self.student_id} {self.date} {self.period}>'

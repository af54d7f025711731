"""Demo data for local development."""
from scanroll.models.user import User, UserRole
from scanroll.services.document_store import SQLAlchemyDocumentStore
from scanroll.services.student_service import StudentService

DEMO_EMAIL = 'teacher@school.test'
DEMO_PASSWORD = 'teacher123'

DEMO_ROSTER = [
    ('Juan Dela Cruz', 'LRN001', 'Grade 4A'),
    ('Maria Santos', 'LRN002', 'Grade 4A'),
    ('Jose Rizal', 'LRN003', 'Grade 4B'),
]

class SeedService:
    """Creates a demo teacher with a small roster."""
    
    @staticmethod
    def seed_all() -> User:
        teacher = User.query.filter_by(email=DEMO_EMAIL).first()
        if not teacher:
            teacher = User(
                email=DEMO_EMAIL,
                first_name='Demo',
                last_name='Teacher',
                department='Elementary Department',
                role=UserRole.TEACHER,
                email_verified=True
            )
            teacher.set_password(DEMO_PASSWORD)
            teacher.save()
        
        store = SQLAlchemyDocumentStore()
        for name, student_id, section in DEMO_ROSTER:
            # Existing entries come back as a duplicate error and are skipped
            StudentService.add_student(store, teacher.uid, name, student_id, section)
        
        return teacher

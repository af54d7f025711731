"""Ownership check run before any scan is recorded."""
import logging

from scanroll.services.document_store import DocumentStore, StoreError

logger = logging.getLogger(__name__)

class RosterGuard:
    """Confirms a scanned student belongs to the requesting teacher."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def verify_ownership(self, student_id: str, teacher_id: str) -> bool:
        """True when the teacher's roster holds ``student_id``.

        The payload's own owner field is never consulted. Store failures
        deny the scan.
        """
        if not student_id or not teacher_id:
            return False

        try:
            matches = self.store.query_documents(
                'students',
                {'student_id': student_id, 'teacher_id': teacher_id}
            )
        except StoreError as e:
            logger.error("Roster lookup for %s failed, denying scan: %s", student_id, e)
            return False

        if len(matches) > 1:
            logger.warning(
                "Roster of teacher %s lists student %s %d times",
                teacher_id, student_id, len(matches)
            )
        return len(matches) > 0

"""Scan workflow: parse, authorize, classify, override, commit."""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from scanroll.services.attendance_ledger import AttendanceLedger, TeacherContextError
from scanroll.services.qr_service import QRService, ScanPayload
from scanroll.services.roster_guard import RosterGuard
from scanroll.services.time_classifier import AttendanceStatus, Period, TimeClassifier
from scanroll.utils.clock import format_scan_time

logger = logging.getLogger(__name__)

class ScanState(Enum):
    IDLE = 'idle'
    SCANNING = 'scanning'
    AWAITING_CONFIRMATION = 'awaiting_confirmation'

class ScanError(Enum):
    """Recoverable outcomes reported back to the scanning teacher."""
    UNRECOGNIZED_PAYLOAD = 'This QR code format is not recognized'
    ACCESS_DENIED = 'Access denied: this student does not belong to your class'
    SCAN_IN_PROGRESS = 'A scan is already awaiting confirmation'
    NOTHING_PENDING = 'No scan is awaiting confirmation'
    RECORD_FAILED = 'Failed to record attendance. Please try again'

    @property
    def message(self) -> str:
        return self.value

@dataclass
class PendingDecision:
    """Suggested entry for the scanned student, open to a status override."""
    student: ScanPayload
    period: Period
    status: AttendanceStatus
    suggested_status: AttendanceStatus
    scan_time: str

    @property
    def overridden(self) -> bool:
        return self.status is not self.suggested_status

    def to_dict(self):
        return {
            'student': self.student.to_dict(),
            'period': self.period.value,
            'status': self.status.value,
            'suggested_status': self.suggested_status.value,
            'overridden': self.overridden,
            'scan_time': self.scan_time,
        }

class ScanSession:
    """State machine for one teacher's scanner.

    IDLE -> SCANNING -> AWAITING_CONFIRMATION -> IDLE. Only a scan arriving
    in IDLE is processed; repeated reads of the same code while a decision is
    pending are dropped. The period of a pending decision is fixed at scan
    time and only its status can be overridden.
    """

    def __init__(self, ledger: AttendanceLedger, guard: RosterGuard, teacher_id: str):
        if not teacher_id:
            raise TeacherContextError("ScanSession requires a signed-in teacher")
        if ledger.teacher_id != teacher_id:
            raise TeacherContextError("ScanSession and ledger belong to different teachers")
        self.ledger = ledger
        self.guard = guard
        self.teacher_id = teacher_id
        self.state = ScanState.IDLE
        self.pending: Optional[PendingDecision] = None
        self._latch = threading.Lock()

    def _claim(self) -> bool:
        with self._latch:
            if self.state is not ScanState.IDLE:
                return False
            self.state = ScanState.SCANNING
            return True

    def _reset(self) -> None:
        self.pending = None
        self.state = ScanState.IDLE

    def on_scan(self, raw) -> Tuple[Optional[PendingDecision], Optional[ScanError]]:
        """Process one decoded QR read."""
        if not self._claim():
            logger.info("Ignoring scan for teacher %s while %s", self.teacher_id, self.state.value)
            return None, ScanError.SCAN_IN_PROGRESS

        try:
            return self._process(raw)
        except Exception:
            logger.exception("Scan processing failed for teacher %s", self.teacher_id)
            self._reset()
            raise

    def _process(self, raw) -> Tuple[Optional[PendingDecision], Optional[ScanError]]:
        payload, parse_error = QRService.parse_payload(raw)
        if payload is None:
            logger.info("Rejected scan payload for teacher %s: %s", self.teacher_id, parse_error)
            self._reset()
            return None, ScanError.UNRECOGNIZED_PAYLOAD

        if not self.guard.verify_ownership(payload.student_id, self.teacher_id):
            logger.warning(
                "Teacher %s scanned student %s outside their roster",
                self.teacher_id, payload.student_id
            )
            self._reset()
            return None, ScanError.ACCESS_DENIED

        now = self.ledger.local_now()
        suggestion = TimeClassifier.classify(now)
        self.pending = PendingDecision(
            student=payload,
            period=suggestion.period,
            status=suggestion.status,
            suggested_status=suggestion.status,
            scan_time=format_scan_time(now),
        )
        self.state = ScanState.AWAITING_CONFIRMATION
        return self.pending, None

    def override(self, status) -> Tuple[Optional[PendingDecision], Optional[ScanError]]:
        """Replace the pending status; the period never changes."""
        if self.state is not ScanState.AWAITING_CONFIRMATION:
            return None, ScanError.NOTHING_PENDING

        self.pending.status = AttendanceStatus(
            status.value if isinstance(status, AttendanceStatus) else status
        )
        return self.pending, None

    def confirm(self) -> Tuple[Optional[Any], Optional[ScanError]]:
        """Commit the pending decision through the ledger.

        On a store failure the decision stays pending so the teacher can
        confirm again without rescanning.
        """
        if self.state is not ScanState.AWAITING_CONFIRMATION:
            return None, ScanError.NOTHING_PENDING

        decision = self.pending
        record_id, error = self.ledger.record(
            decision.student.student_id,
            decision.period,
            decision.status
        )
        if error:
            return None, ScanError.RECORD_FAILED

        self._reset()
        return record_id, None

    def cancel(self) -> bool:
        """Discard the pending decision. Returns False if nothing was pending."""
        if self.state is not ScanState.AWAITING_CONFIRMATION:
            return False
        self._reset()
        return True

    def to_dict(self):
        return {
            'state': self.state.value,
            'pending': self.pending.to_dict() if self.pending else None,
        }

"""Per-teacher attendance log: commits records and derives daily counts."""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple

from scanroll.services.document_store import DocumentStore, StoreError
from scanroll.services.time_classifier import AttendanceStatus, Period, TimeClassifier
from scanroll.utils.clock import Clock, format_record_date, format_scan_time, system_clock

logger = logging.getLogger(__name__)

ATTENDANCE_COLLECTION = 'attendance'

class TeacherContextError(RuntimeError):
    """Engine used without an authenticated teacher."""
    pass

@dataclass
class PeriodTally:
    """Counts for one period of one day."""
    present: int = 0
    late: int = 0
    absent: int = 0

    def add(self, status: str) -> None:
        if status == AttendanceStatus.PRESENT.value:
            self.present += 1
        elif status == AttendanceStatus.LATE.value:
            self.late += 1
        else:
            self.absent += 1

    @property
    def total(self) -> int:
        return self.present + self.late + self.absent

    def to_dict(self) -> Dict[str, int]:
        return {'present': self.present, 'late': self.late, 'absent': self.absent}

@dataclass
class DailyStats:
    """Present/late/absent counts per period for one calendar day."""
    date: str
    morning: PeriodTally = field(default_factory=PeriodTally)
    afternoon: PeriodTally = field(default_factory=PeriodTally)

    @classmethod
    def from_records(cls, date: str, records: List[Dict[str, Any]]) -> 'DailyStats':
        stats = cls(date=date)
        for record in records:
            tally = stats.for_period(record.get('period'))
            if tally is not None:
                tally.add(record.get('status'))
        return stats

    def for_period(self, period) -> Optional[PeriodTally]:
        value = period.value if isinstance(period, Period) else period
        if value == Period.MORNING.value:
            return self.morning
        if value == Period.AFTERNOON.value:
            return self.afternoon
        return None

    @property
    def total(self) -> int:
        return self.morning.total + self.afternoon.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'morning': self.morning.to_dict(),
            'afternoon': self.afternoon.to_dict(),
            'total': self.total
        }

class AttendanceLedger:
    """Attendance log of one teacher, newest record first.

    The log is rebuilt wholesale by ``load_all`` and afterwards only grows
    through ``record``: a successful store write is prepended locally
    without re-reading the store, and a failed write leaves the log as it
    was. Records are never edited; a correction is simply a newer record for
    the same student, day and period.

    Days are compared as formatted strings (``M/D/YYYY`` in the classroom
    zone), so a record only counts towards the day string it was written
    with.
    """

    def __init__(
        self,
        store: DocumentStore,
        teacher_id: str,
        clock: Clock = None,
        tz: tzinfo = None
    ):
        if not teacher_id:
            raise TeacherContextError("AttendanceLedger requires a signed-in teacher")
        self.store = store
        self.teacher_id = teacher_id
        self.clock = clock or system_clock
        self.tz = tz or timezone.utc
        self.log: List[Dict[str, Any]] = []
        self.loading = False
        self.last_error: Optional[str] = None

    def local_now(self) -> datetime:
        return self.clock().astimezone(self.tz)

    def load_all(self, teacher_id: str = None) -> bool:
        """Replace the log with every stored record of the teacher.

        Returns False and keeps the previous log when the store fails.
        """
        teacher_id = teacher_id or self.teacher_id
        if teacher_id != self.teacher_id:
            raise TeacherContextError(
                f"Ledger of teacher {self.teacher_id} cannot load records of {teacher_id}"
            )

        self.loading = True
        try:
            records = self.store.query_documents(
                ATTENDANCE_COLLECTION,
                {'teacher_id': teacher_id},
                order_by='timestamp',
                descending=True
            )
        except StoreError as e:
            logger.error("Loading attendance for teacher %s failed: %s", teacher_id, e)
            self.last_error = 'Failed to load attendance'
            return False
        finally:
            self.loading = False

        self.log = records
        self.last_error = None
        logger.debug("Loaded %d attendance records for teacher %s", len(records), teacher_id)
        return True

    def record(self, student_id: str, period, status) -> Tuple[Optional[Any], Optional[str]]:
        """Persist one attendance record and prepend it to the log.

        Returns ``(record_id, None)`` on success or ``(None, message)`` when
        the store rejects the write. Identical calls create separate records.
        """
        if not student_id:
            raise ValueError("student_id is required")
        period = Period(period.value if isinstance(period, Period) else period)
        status = AttendanceStatus(status.value if isinstance(status, AttendanceStatus) else status)

        instant = self.clock().astimezone(timezone.utc)
        local = instant.astimezone(self.tz)
        fields = {
            'student_id': student_id,
            'teacher_id': self.teacher_id,
            'date': format_record_date(local),
            'period': period.value,
            'status': status.value,
            'scan_time': format_scan_time(local),
            'timestamp': instant,
        }

        try:
            record_id = self.store.create_record(ATTENDANCE_COLLECTION, fields)
        except StoreError as e:
            logger.error("Recording attendance for %s failed: %s", student_id, e)
            return None, 'Failed to record attendance'

        entry = dict(fields, id=record_id, timestamp=instant.isoformat())
        self.log.insert(0, entry)
        logger.info(
            "Recorded %s %s for student %s (teacher %s)",
            period.value, status.value, student_id, self.teacher_id
        )
        return record_id, None

    def mark_absent(self, student_id: str, period=None) -> Tuple[Optional[Any], Optional[str]]:
        """Manual absence entry, defaulting to the current period."""
        return self.record(student_id, period or self.current_period(), AttendanceStatus.ABSENT)

    def remove_absence(self, student_id: str, period=None) -> Tuple[Optional[Any], Optional[str]]:
        """Correct an absence by recording the student present."""
        return self.record(student_id, period or self.current_period(), AttendanceStatus.PRESENT)

    def records_for_date(self, day) -> List[Dict[str, Any]]:
        """Log entries written on ``day`` (a date or datetime)."""
        day_string = format_record_date(day)
        return [entry for entry in self.log if entry.get('date') == day_string]

    def stats_for_date(self, day) -> DailyStats:
        return DailyStats.from_records(format_record_date(day), self.records_for_date(day))

    def stats_for_today(self) -> DailyStats:
        return self.stats_for_date(self.local_now())

    def current_period(self) -> Period:
        return TimeClassifier.default_period(self.local_now())

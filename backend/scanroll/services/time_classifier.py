"""Wall-clock classification of attendance scans."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

class Period(Enum):
    """Half-day session a record belongs to."""
    MORNING = 'morning'
    AFTERNOON = 'afternoon'

class AttendanceStatus(Enum):
    """Attendance judgement for a period."""
    PRESENT = 'present'
    LATE = 'late'
    ABSENT = 'absent'

# (end hour exclusive, period, status), scanned in order
_WINDOWS = (
    (8, Period.MORNING, AttendanceStatus.PRESENT),
    (10, Period.MORNING, AttendanceStatus.LATE),
    (12, Period.MORNING, AttendanceStatus.ABSENT),
    (14, Period.AFTERNOON, AttendanceStatus.PRESENT),
    (15, Period.AFTERNOON, AttendanceStatus.LATE),
)

AFTERNOON_START_HOUR = 12

@dataclass(frozen=True)
class Classification:
    """Suggested period and status for a scan."""
    period: Period
    status: AttendanceStatus

    def to_dict(self):
        return {'period': self.period.value, 'status': self.status.value}

class TimeClassifier:
    """Maps a local wall-clock time to a session and status.

    Thresholds are half-open ``[start, end)`` on the hour, so a scan at
    exactly 08:00 is already late and one at 12:00 is already afternoon.
    Callers pass a datetime expressed in the classroom's zone; only its
    ``hour`` is read.
    """

    @staticmethod
    def classify(now: datetime) -> Classification:
        """Return the default period and status for ``now``."""
        hour = now.hour
        for end_hour, period, status in _WINDOWS:
            if hour < end_hour:
                return Classification(period, status)
        return Classification(Period.AFTERNOON, AttendanceStatus.ABSENT)

    @staticmethod
    def default_period(now: datetime) -> Period:
        """Session for ``now`` without the present/late/absent judgement."""
        if now.hour < AFTERNOON_START_HOUR:
            return Period.MORNING
        return Period.AFTERNOON

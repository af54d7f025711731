"""Signed-in teacher state, passed explicitly to the attendance engine."""
import logging
import threading
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Dict, List, Optional

from scanroll.services.attendance_ledger import AttendanceLedger, TeacherContextError
from scanroll.services.document_store import DocumentStore
from scanroll.services.roster_guard import RosterGuard
from scanroll.services.scan_session import ScanSession
from scanroll.utils.clock import Clock

logger = logging.getLogger(__name__)

__all__ = [
    'AuthSession', 'AuthEvents', 'TeacherContext',
    'TeacherContextRegistry', 'TeacherContextError'
]

@dataclass(frozen=True)
class AuthSession:
    """Authenticated user handle plus the profile fields the engine reads."""
    user_id: str
    email: str
    email_verified: bool = False
    name: str = ''
    role: str = 'teacher'

    @classmethod
    def from_user(cls, user) -> 'AuthSession':
        return cls(
            user_id=user.uid,
            email=user.email,
            email_verified=bool(user.email_verified),
            name=user.full_name,
            role=user.role.value if user.role else 'teacher',
        )

AuthCallback = Callable[[str, Optional[AuthSession]], None]

class AuthEvents:
    """Sign-in/sign-out notifications.

    Subscribers are called with ``(user_id, session)`` where ``session`` is
    None when the user signed out. ``subscribe`` returns the function that
    removes the subscription.
    """

    def __init__(self):
        self._callbacks: List[AuthCallback] = []
        self._sessions: Dict[str, AuthSession] = {}
        self._lock = threading.Lock()

    def subscribe(self, callback: AuthCallback) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def current_user(self, user_id: str) -> Optional[AuthSession]:
        return self._sessions.get(user_id)

    def signed_in(self, session: AuthSession) -> None:
        with self._lock:
            self._sessions[session.user_id] = session
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(session.user_id, session)

    def signed_out(self, user_id: str) -> None:
        with self._lock:
            self._sessions.pop(user_id, None)
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(user_id, None)

@dataclass
class TeacherContext:
    """Everything the scanner needs for one signed-in teacher."""
    auth: AuthSession
    ledger: AttendanceLedger
    guard: RosterGuard
    scan_session: ScanSession

    @property
    def teacher_id(self) -> str:
        return self.auth.user_id

class TeacherContextRegistry:
    """Builds one TeacherContext per signed-in teacher.

    Subscribed to ``AuthEvents``: a sign-in builds the context and loads the
    teacher's ledger, which is the only side effect of authentication on the
    engine. A sign-out drops the context together with any pending scan.
    """

    def __init__(
        self,
        store_factory: Callable[[], DocumentStore],
        events: AuthEvents,
        tz: tzinfo = None,
        clock: Clock = None
    ):
        self.store_factory = store_factory
        self.events = events
        self.tz = tz
        self.clock = clock
        self._contexts: Dict[str, TeacherContext] = {}
        self._lock = threading.Lock()
        self._unsubscribe = events.subscribe(self._on_auth_change)

    def close(self) -> None:
        self._unsubscribe()
        with self._lock:
            self._contexts.clear()

    def _build(self, session: AuthSession) -> TeacherContext:
        store = self.store_factory()
        ledger = AttendanceLedger(store, session.user_id, clock=self.clock, tz=self.tz)
        guard = RosterGuard(store)
        return TeacherContext(
            auth=session,
            ledger=ledger,
            guard=guard,
            scan_session=ScanSession(ledger, guard, session.user_id),
        )

    def _on_auth_change(self, user_id: str, session: Optional[AuthSession]) -> None:
        if session is None:
            with self._lock:
                self._contexts.pop(user_id, None)
            logger.info("Closed attendance context for teacher %s", user_id)
            return

        context = self._build(session)
        with self._lock:
            self._contexts[user_id] = context
        if not context.ledger.load_all():
            logger.warning("Attendance log for teacher %s starts empty", user_id)

    def get(self, teacher_id: str) -> TeacherContext:
        """Context of a signed-in teacher; missing contexts are a caller bug."""
        context = self._contexts.get(teacher_id)
        if context is None:
            raise TeacherContextError(f"No signed-in teacher {teacher_id!r}")
        return context

    def get_or_sign_in(self, session: AuthSession) -> TeacherContext:
        """Context for a token-authenticated request, replaying sign-in if needed."""
        context = self._contexts.get(session.user_id)
        if context is None:
            self.events.signed_in(session)
            context = self.get(session.user_id)
        return context

    def __contains__(self, teacher_id: str) -> bool:
        return teacher_id in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import from_epoch_ms, now_ms
from ..core.exceptions import RequestError
from ..oracle.client import AttendanceOracle
from ..oracle.model import SummaryRecord
from ..shifts.policy import ShiftPolicy
from .model import AttendanceSession, CheckedIn, CheckedOut, NotCheckedIn
from .store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileOutcome:
    session: AttendanceSession
    remote_checked: bool


class SessionReconciler:
    """Merges the locally persisted session with today's remote record.

    Order of precedence: the remote record, then the local cache, then NotCheckedIn.
    A failed remote query keeps whatever the cache produced.
    """

    def __init__(
        self,
        store: SessionStore,
        oracle: AttendanceOracle,
        policy: Optional[ShiftPolicy] = None,
        *,
        clock: Callable[[], int] = now_ms,
    ):
        self._store = store
        self._oracle = oracle
        self._policy = policy or ShiftPolicy()
        self._clock = clock

    def reconcile(self, user_id: str) -> ReconcileOutcome:
        session: AttendanceSession = self.load_local(user_id)

        try:
            records = self._oracle.fetch_today_summary()
        except RequestError as e:
            logger.warning(f"Today's summary unavailable for user {user_id}, using cached view: {e}")
            return ReconcileOutcome(session=session, remote_checked=False)

        record = _first_usable(records)
        if record is None:
            return ReconcileOutcome(session=session, remote_checked=True)

        if record.is_closed:
            self._store.clear(user_id)
            session = CheckedOut(user_id=user_id, check_in_at=record.in_time, check_out_at=record.out_time)
            return ReconcileOutcome(session=session, remote_checked=True)

        return ReconcileOutcome(session=self._adopt_open(user_id, session, record.in_time), remote_checked=True)

    def load_local(self, user_id: str) -> AttendanceSession:
        stored = self._store.load(user_id)
        if stored is None:
            return NotCheckedIn(user_id=user_id)

        if not stored.is_consistent():
            logger.warning(f"Discarding inconsistent persisted session for user {user_id}: {stored}")
            self._store.clear(user_id)
            return NotCheckedIn(user_id=user_id)

        if stored.shift_end_at <= self._clock():
            # The shift elapsed while we were away; only the server can tell us more.
            self._store.clear(user_id)
            return NotCheckedIn(user_id=user_id)

        return CheckedIn(
            user_id=user_id,
            check_in_at=stored.check_in_at,
            shift_duration_seconds=stored.shift_duration_seconds,
        )

    def _adopt_open(self, user_id: str, local: AttendanceSession, in_time: int) -> CheckedIn:
        duration = self._policy.duration_for(from_epoch_ms(in_time))
        if isinstance(local, CheckedIn) and local.check_in_at == in_time and local.shift_duration_seconds == duration:
            return local

        session = CheckedIn(user_id=user_id, check_in_at=in_time, shift_duration_seconds=duration)
        self._store.save(user_id, session.check_in_at, session.shift_end_at, session.shift_duration_seconds)
        return session


def _first_usable(records: Sequence[SummaryRecord]) -> Optional[SummaryRecord]:
    for record in records or ():
        if record.in_time is not None:
            return record
    return None

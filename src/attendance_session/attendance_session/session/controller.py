from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Callable, Iterator, Optional

from ..common.datetime_utils import format_clock, format_hms, from_epoch_ms, now_ms
from ..common.validators import require_user_id
from ..core.enums import SessionStatus
from ..core.exceptions import ActionInProgress, ConfirmationRequired, LocationUnavailable, RequestError, ValidationError
from ..countdown.driver import CountdownDriver
from ..location.model import Location
from ..location.provider import LocationProvider, capture_location
from ..oracle.client import AttendanceOracle
from ..shifts.policy import ShiftPolicy
from .model import AttendanceSession, CheckedIn, CheckedOut, NotCheckedIn
from .reconciler import SessionReconciler
from .store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusView:
    """Snapshot handed to the UI."""

    user_id: Optional[str]
    status: SessionStatus
    check_in_at: Optional[int]
    check_out_at: Optional[int]
    shift_end_at: Optional[int]
    check_in_display: Optional[str]
    check_out_display: Optional[str]
    remaining_seconds: int
    remaining_display: str
    shift_label: str
    countdown_active: bool

    def as_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


class SessionController:
    """Check-in/check-out state machine for the active user.

    Transitions run one at a time. The countdown is the only background
    activity and is (re)started only after the session has been persisted.
    """

    def __init__(
        self,
        oracle: AttendanceOracle,
        store: SessionStore,
        *,
        policy: Optional[ShiftPolicy] = None,
        driver: Optional[CountdownDriver] = None,
        reconciler: Optional[SessionReconciler] = None,
        clock: Callable[[], int] = now_ms,
        on_tick: Optional[Callable[[int], None]] = None,
    ):
        self._oracle = oracle
        self._store = store
        self._policy = policy or ShiftPolicy()
        self._clock = clock
        self._driver = driver or CountdownDriver(clock=clock)
        self._reconciler = reconciler or SessionReconciler(store, oracle, self._policy, clock=clock)
        self._on_tick = on_tick
        self._busy = threading.Lock()
        # Guards the countdown against a deactivate() racing an in-flight action.
        self._countdown_lock = threading.Lock()
        self._suspended = False
        self._user_id: Optional[str] = None
        self._session: Optional[AttendanceSession] = None
        self._last_tick: Optional[int] = None

    # --- lifecycle ---

    def activate(self, user_id: str) -> StatusView:
        """Reset, then rebuild today's state from the local cache and the server."""
        user_id = require_user_id(user_id)
        with self._busy:
            with self._countdown_lock:
                self._suspended = False
                self._driver.stop()
            self._user_id = user_id
            self._session = NotCheckedIn(user_id=user_id)
            self._last_tick = None

            outcome = self._reconciler.reconcile(user_id)
            self._session = outcome.session
            self._sync_countdown()
            logger.info(f"Activated user {user_id}: {outcome.session.status.value} (remote_checked={outcome.remote_checked})")
        return self.current_status()

    def resume(self) -> StatusView:
        """App returned to the foreground: reconcile the same user again."""
        if self._user_id is None:
            return self.current_status()
        return self.activate(self._user_id)

    def deactivate(self) -> None:
        """Stop ticking until the next activate()/resume().

        The persisted session is kept. An action still in flight completes and
        persists its result but does not restart the countdown.
        """
        with self._countdown_lock:
            self._suspended = True
            self._driver.stop()

    def reset(self) -> None:
        """Logout: forget the in-memory session of the previous user."""
        with self._busy:
            self._driver.stop()
            self._user_id = None
            self._session = None
            self._last_tick = None

    def close(self) -> None:
        self.deactivate()

    def __enter__(self) -> "SessionController":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- actions ---

    def request_check_in(self, location: Optional[Location]) -> StatusView:
        with self._exclusive():
            user_id, session = self._require_session()
            if isinstance(session, CheckedIn):
                raise ValidationError("You are already checked in")
            if isinstance(session, CheckedOut):
                raise ValidationError("You have already checked out today")
            if location is None:
                raise LocationUnavailable("Could not fetch location. Please try again.")

            result = self._oracle.check_in(location)
            if not result.success:
                raise RequestError(result.message or "Check-in failed")

            now = self._clock()
            checked_in = CheckedIn(
                user_id=user_id,
                check_in_at=now,
                shift_duration_seconds=self._policy.duration_for(from_epoch_ms(now)),
            )
            self._store.save(user_id, checked_in.check_in_at, checked_in.shift_end_at, checked_in.shift_duration_seconds)
            self._session = checked_in
            self._sync_countdown()
            logger.info(f"User {user_id} checked in, shift ends at {checked_in.shift_end_at}")
        return self.current_status()

    def request_check_out(self, location: Optional[Location], *, confirmed: bool = False) -> StatusView:
        with self._exclusive():
            user_id, session = self._require_session()
            if not isinstance(session, CheckedIn):
                raise ValidationError("You are not checked in")
            if not confirmed:
                raise ConfirmationRequired("Are you sure you want to check out?")
            if location is None:
                raise LocationUnavailable("Could not fetch location. Please try again.")

            result = self._oracle.check_out(location)
            if not result.success:
                raise RequestError(result.message or "Check-out failed")

            self._session = CheckedOut(user_id=user_id, check_in_at=session.check_in_at, check_out_at=self._clock())
            self._store.clear(user_id)
            self._sync_countdown()
            logger.info(f"User {user_id} checked out")
        return self.current_status()

    def check_in_here(self, provider: LocationProvider) -> StatusView:
        return self.request_check_in(capture_location(provider))

    def check_out_here(self, provider: LocationProvider, *, confirmed: bool = False) -> StatusView:
        if not confirmed:
            raise ConfirmationRequired("Are you sure you want to check out?")
        return self.request_check_out(capture_location(provider), confirmed=True)

    # --- queries ---

    @property
    def session(self) -> Optional[AttendanceSession]:
        return self._session

    @property
    def countdown_active(self) -> bool:
        return self._driver.active

    @property
    def last_tick(self) -> Optional[int]:
        return self._last_tick

    def current_status(self) -> StatusView:
        session = self._session
        now = self._clock()
        label = self._policy.label_for(from_epoch_ms(now))

        if isinstance(session, CheckedIn):
            remaining = session.remaining_seconds(now)
            return StatusView(
                user_id=session.user_id,
                status=session.status,
                check_in_at=session.check_in_at,
                check_out_at=None,
                shift_end_at=session.shift_end_at,
                check_in_display=format_clock(session.check_in_at),
                check_out_display=None,
                remaining_seconds=remaining,
                remaining_display=format_hms(remaining),
                shift_label=self._policy.label_for(from_epoch_ms(session.check_in_at)),
                countdown_active=self._driver.active,
            )

        if isinstance(session, CheckedOut):
            return StatusView(
                user_id=session.user_id,
                status=session.status,
                check_in_at=session.check_in_at,
                check_out_at=session.check_out_at,
                shift_end_at=None,
                check_in_display=format_clock(session.check_in_at),
                check_out_display=format_clock(session.check_out_at),
                remaining_seconds=0,
                remaining_display=format_hms(0),
                shift_label=label,
                countdown_active=self._driver.active,
            )

        return StatusView(
            user_id=self._user_id,
            status=SessionStatus.NOT_CHECKED_IN,
            check_in_at=None,
            check_out_at=None,
            shift_end_at=None,
            check_in_display=None,
            check_out_display=None,
            remaining_seconds=0,
            remaining_display=format_hms(0),
            shift_label=label,
            countdown_active=self._driver.active,
        )

    # --- internals ---

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if not self._busy.acquire(blocking=False):
            raise ActionInProgress("Another attendance action is in progress")
        try:
            yield
        finally:
            self._busy.release()

    def _require_session(self) -> tuple[str, AttendanceSession]:
        if self._user_id is None or self._session is None:
            raise ValidationError("No active user; call activate() first")
        return self._user_id, self._session

    def _sync_countdown(self) -> None:
        session = self._session
        with self._countdown_lock:
            if isinstance(session, CheckedIn) and not self._suspended:
                self._driver.start(session.shift_end_at, self._handle_tick)
                return
            self._driver.stop()
        if not isinstance(session, CheckedIn):
            self._last_tick = None

    def _handle_tick(self, remaining: int) -> None:
        self._last_tick = remaining
        if self._on_tick is not None:
            self._on_tick(remaining)

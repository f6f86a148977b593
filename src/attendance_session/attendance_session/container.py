from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .corrections.service import CorrectionService
from .countdown.driver import CountdownDriver
from .database.connection import DBConfig, DatabaseConnection
from .oracle.client import AttendanceOracle
from .oracle.http_client import HttpAttendanceOracle
from .session.controller import SessionController
from .session.reconciler import SessionReconciler
from .session.store import SessionStore
from .shifts.policy import ShiftPolicy
from .storage.mysql_key_value_storage import MySQLKeyValueStorage
from .storage.repository import KeyValueStorage
from .summary.service import SummaryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    storage: KeyValueStorage
    oracle: AttendanceOracle

    shift_policy: ShiftPolicy
    session_store: SessionStore
    countdown_driver: CountdownDriver
    reconciler: SessionReconciler
    session_controller: SessionController
    summary_service: SummaryService
    correction_service: CorrectionService


def build_container(
    *,
    db_config: Optional[dict] = None,
    api_base_url: str = "",
    api_timeout: float = 10.0,
    api_token: Optional[str] = None,
    tick_seconds: float = 1.0,
    storage: Optional[KeyValueStorage] = None,
    oracle: Optional[AttendanceOracle] = None,
    on_tick: Optional[Callable[[int], None]] = None,
) -> Container:
    conn = None
    if storage is None:
        if db_config is None:
            raise ValueError("db_config is required when no storage is given")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        storage = MySQLKeyValueStorage(conn)

    if oracle is None:
        oracle = HttpAttendanceOracle(api_base_url, timeout=api_timeout, token=api_token)

    shift_policy = ShiftPolicy()
    session_store = SessionStore(storage)
    countdown_driver = CountdownDriver(interval=tick_seconds)
    reconciler = SessionReconciler(session_store, oracle, shift_policy)
    session_controller = SessionController(
        oracle,
        session_store,
        policy=shift_policy,
        driver=countdown_driver,
        reconciler=reconciler,
        on_tick=on_tick,
    )

    return Container(
        conn=conn,
        storage=storage,
        oracle=oracle,
        shift_policy=shift_policy,
        session_store=session_store,
        countdown_driver=countdown_driver,
        reconciler=reconciler,
        session_controller=session_controller,
        summary_service=SummaryService(oracle),
        correction_service=CorrectionService(oracle),
    )

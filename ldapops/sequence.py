"""Fixed add / login / search / modify / search / delete / search pipeline.

The run is strictly sequential on one administrator connection. The first
directory failure stops the run in FAILED; earlier steps are not rolled back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from ldap3 import Connection

from .directory import DirectoryClient, DirectoryError, UserEntry
from .services import add_user, delete_user, modify_user, search_entries, user_filter, verify_login

log = logging.getLogger(__name__)


class SequenceState(str, Enum):
    IDLE = "idle"
    ADDING = "adding"
    LOGGING_IN = "logging_in"
    SEARCHING_AFTER_ADD = "searching_after_add"
    MODIFYING = "modifying"
    SEARCHING_AFTER_MODIFY = "searching_after_modify"
    DELETING = "deleting"
    SEARCHING_AFTER_DELETE = "searching_after_delete"
    DONE = "done"
    FAILED = "failed"


@dataclass
class StepOutcome:
    state: SequenceState
    status: str  # "ok" | "warning" | "failed"
    message: str
    payload: Any = None


@dataclass
class SequenceReport:
    state: SequenceState = SequenceState.IDLE
    steps: list[StepOutcome] = field(default_factory=list)
    error: Optional[DirectoryError] = None

    @property
    def ok(self) -> bool:
        return self.state == SequenceState.DONE


class OperationSequencer:
    def __init__(self, client: DirectoryClient, user: UserEntry, *, base_dn: str, new_mail: str) -> None:
        self.client = client
        self.user = user
        self.base_dn = base_dn
        self.new_mail = new_mail

    def run(self) -> SequenceReport:
        report = SequenceReport()
        try:
            conn = self.client.admin_connection()
        except DirectoryError as e:
            log.error("Admin bind error: %s", e)
            report.state = SequenceState.FAILED
            report.error = e
            return report
        log.info("Admin bound successfully")

        try:
            for state, step in self._steps(conn):
                report.state = state
                try:
                    outcome = step()
                except DirectoryError as e:
                    log.error("Step %s failed: %s", state.value, e)
                    report.steps.append(StepOutcome(state, "failed", str(e)))
                    report.state = SequenceState.FAILED
                    report.error = e
                    return report
                log.info("Step %s: %s (%s)", state.value, outcome.status, outcome.message)
                report.steps.append(outcome)
            report.state = SequenceState.DONE
            return report
        finally:
            self.client.unbind(conn)

    def _steps(self, conn: Connection) -> list[tuple[SequenceState, Callable[[], StepOutcome]]]:
        S = SequenceState
        return [
            (S.ADDING, lambda: self._add(conn)),
            (S.LOGGING_IN, self._login),
            (S.SEARCHING_AFTER_ADD, lambda: self._search(conn, S.SEARCHING_AFTER_ADD, "After add")),
            (S.MODIFYING, lambda: self._modify(conn)),
            (S.SEARCHING_AFTER_MODIFY, lambda: self._search(conn, S.SEARCHING_AFTER_MODIFY, "After modify")),
            (S.DELETING, lambda: self._delete(conn)),
            (S.SEARCHING_AFTER_DELETE, lambda: self._search(conn, S.SEARCHING_AFTER_DELETE, "After delete")),
        ]

    def _add(self, conn: Connection) -> StepOutcome:
        res = add_user(conn, self.user)
        return StepOutcome(SequenceState.ADDING, res.status, res.message)

    def _login(self) -> StepOutcome:
        res = verify_login(self.client, self.user.dn, self.user.password)
        if res.success:
            return StepOutcome(SequenceState.LOGGING_IN, "ok", "User login successful", res.to_dict())
        return StepOutcome(SequenceState.LOGGING_IN, "warning", "User login failed", res.to_dict())

    def _modify(self, conn: Connection) -> StepOutcome:
        res = modify_user(conn, self.user.dn, {"mail": [self.new_mail]})
        return StepOutcome(SequenceState.MODIFYING, res.status, res.message)

    def _delete(self, conn: Connection) -> StepOutcome:
        res = delete_user(conn, self.user.dn)
        return StepOutcome(SequenceState.DELETING, res.status, res.message)

    def _search(self, conn: Connection, state: SequenceState, label: str) -> StepOutcome:
        log.info("=== %s ===", label)
        records = search_entries(conn, self.base_dn, user_filter(self.user.uid))
        for rec in records:
            log.info("Entry: %s", rec)
        return StepOutcome(state, "ok", f"{len(records)} record(s)", records)

"""Lifecycle operations on the managed user entry.

Every function takes an already bound administrator connection and performs a
single directory call. Expected outcomes come back as OperationResult; anything
the directory rejects is raised as the matching OperationError subclass.
"""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from ldap3 import ALL_ATTRIBUTES, MODIFY_REPLACE, SUBTREE, Connection
from ldap3.core.exceptions import LDAPException

from ..directory.errors import AddError, DeleteError, ModifyError, SearchError, is_already_exists
from ..directory.models import OperationResult, SearchRecord, UserEntry
from ..directory.utils import entry_to_record, escape_ldap_filter_value

log = logging.getLogger(__name__)

DEFAULT_FILTER = "(objectClass=inetOrgPerson)"


def user_filter(uid: str) -> str:
    return f"(uid={escape_ldap_filter_value(uid)})"


def add_user(conn: Connection, entry: UserEntry) -> OperationResult:
    try:
        ok = bool(conn.add(entry.dn, attributes=entry.to_attributes()))
    except LDAPException as e:
        raise AddError.from_exception(f"Add user {entry.dn} failed", e) from e

    res = dict(conn.result or {})
    if ok:
        log.info("User added: %s", entry.dn)
        return OperationResult(ok=True, message="User added successfully")
    if is_already_exists(res):
        log.warning("User %s already exists, skipping add", entry.dn)
        return OperationResult(ok=True, status="warning", message="User already exists, skipping add")
    raise AddError.from_result(f"Add user {entry.dn} failed", res)


def modify_user(conn: Connection, dn: str, changes: Mapping[str, Sequence[str]]) -> OperationResult:
    """Replace each listed attribute with the given values."""
    payload = {attr: [(MODIFY_REPLACE, list(values))] for attr, values in changes.items()}
    try:
        ok = bool(conn.modify(dn, payload))
    except LDAPException as e:
        raise ModifyError.from_exception(f"Modify user {dn} failed", e) from e
    if not ok:
        raise ModifyError.from_result(f"Modify user {dn} failed", conn.result)
    log.info("User modified: %s (%s)", dn, ", ".join(sorted(changes)))
    return OperationResult(ok=True, message="User modified successfully")


def delete_user(conn: Connection, dn: str) -> OperationResult:
    # noSuchObject is a failure here, unlike entryAlreadyExists on add.
    try:
        ok = bool(conn.delete(dn))
    except LDAPException as e:
        raise DeleteError.from_exception(f"Delete user {dn} failed", e) from e
    if not ok:
        raise DeleteError.from_result(f"Delete user {dn} failed", conn.result)
    log.info("User deleted: %s", dn)
    return OperationResult(ok=True, message="User deleted successfully")


def search_entries(conn: Connection, base_dn: str, search_filter: str = DEFAULT_FILTER) -> list[SearchRecord]:
    """Subtree search; returns every match or raises, never a partial list."""
    try:
        conn.search(
            search_base=base_dn,
            search_filter=search_filter,
            search_scope=SUBTREE,
            attributes=ALL_ATTRIBUTES,
        )
    except LDAPException as e:
        raise SearchError.from_exception(f"Search {search_filter} under {base_dn} failed", e) from e

    # conn.search() is falsy for an empty result too, so go by the result code.
    res = dict(conn.result or {})
    if res.get("result", 0) != 0:
        raise SearchError.from_result(f"Search {search_filter} under {base_dn} failed", res)

    records = [
        entry_to_record(item)
        for item in (conn.response or [])
        if item.get("type") == "searchResEntry"
    ]
    log.debug("Search %s under %s: %d record(s)", search_filter, base_dn, len(records))
    return records

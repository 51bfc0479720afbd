from __future__ import annotations

from typing import Iterator

from fastapi import Request
from ldap3 import Connection

from .directory import DirectoryClient, UserEntry
from .env_settings import EnvSettings


def get_settings(request: Request) -> EnvSettings:
    return request.app.state.env


def get_directory_client(request: Request) -> DirectoryClient:
    return request.app.state.directory


def get_managed_user(request: Request) -> UserEntry:
    return request.app.state.managed_user


def directory_session(request: Request) -> Iterator[Connection]:
    """One admin-bound connection per request, released whatever the outcome.

    Bind failures propagate as DirectoryError and are turned into a 500 by the
    app's exception handler before any route logic runs.
    """
    client = get_directory_client(request)
    conn = client.admin_connection()
    try:
        yield conn
    finally:
        client.unbind(conn)

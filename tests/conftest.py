from __future__ import annotations

import pytest
from ldap3 import MOCK_SYNC, NONE, Connection, Server

from ldapops.directory import DirectoryClient, DirectoryConfig, UserEntry
from ldapops.env_settings import EnvSettings

from constants import (
    ADMIN_DN,
    ADMIN_PASSWORD,
    BASE_DN,
    ENV_VARS,
    LDAP_URL,
    USER_DN,
    USER_MAIL,
    USER_PASSWORD,
)


@pytest.fixture
def clean_environ(monkeypatch, tmp_path):
    for name in (
        *ENV_VARS, "APP_ENV", "NODE_ENV", "PORT", "LDAP_TEST_USER_MAIL", "LDAP_TEST_USER_NEW_MAIL",
        "LDAP_STARTTLS", "LDAP_CONNECT_TIMEOUT", "LOG_LEVEL", "LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    # keep a stray .env in the invoking directory out of get_env()
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def env(clean_environ) -> EnvSettings:
    return EnvSettings(_env_file=None, **ENV_VARS)


@pytest.fixture
def server() -> Server:
    """In-memory directory holding the base entry and the administrator."""
    srv = Server("ldap.test", get_info=NONE)
    seed = Connection(srv, client_strategy=MOCK_SYNC)
    seed.strategy.add_entry(BASE_DN, {
        "objectClass": ["top", "dcObject", "organization"],
        "dc": "example",
        "o": "Example",
    })
    seed.strategy.add_entry(ADMIN_DN, {
        "objectClass": ["top", "person"],
        "cn": "admin",
        "sn": "admin",
        "userPassword": ADMIN_PASSWORD,
    })
    return srv


@pytest.fixture
def client(server) -> DirectoryClient:
    cfg = DirectoryConfig(url=LDAP_URL, bind_dn=ADMIN_DN, bind_password=ADMIN_PASSWORD)
    return DirectoryClient(cfg, server=server, client_strategy=MOCK_SYNC)


@pytest.fixture
def admin_conn(client):
    conn = client.admin_connection()
    yield conn
    client.unbind(conn)


@pytest.fixture
def user() -> UserEntry:
    return UserEntry(dn=USER_DN, password=USER_PASSWORD, mail=USER_MAIL)

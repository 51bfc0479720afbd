from __future__ import annotations

import logging
import ssl
from contextlib import contextmanager
from typing import Any, Iterator

from ldap3 import ALL, SIMPLE, SYNC, Connection, Server, Tls
from ldap3.core.exceptions import LDAPCommunicationError, LDAPException

from .errors import AuthError, DirectoryConnectionError
from .models import DirectoryConfig

log = logging.getLogger(__name__)


class DirectoryClient:
    """Opens, binds and releases connections to one directory server.

    The ldap3 Server object is built once and shared by every connection the
    client opens; connections themselves are never shared.
    """

    def __init__(
        self,
        cfg: DirectoryConfig,
        *,
        server: Server | None = None,
        client_strategy: str = SYNC,
    ) -> None:
        self.cfg = cfg
        self.client_strategy = client_strategy

        if server is None:
            tls = Tls(validate=ssl.CERT_REQUIRED if cfg.tls_verify else ssl.CERT_NONE)
            server_kwargs: dict[str, Any] = {}
            if cfg.connect_timeout:
                server_kwargs["connect_timeout"] = float(cfg.connect_timeout)
            server = Server(
                cfg.url,
                use_ssl=cfg.use_ssl,
                get_info=ALL,
                tls=tls,
                **server_kwargs,
            )
        self.server = server

    def connect(self) -> Connection:
        """Open the transport (and StartTLS when configured). No bind yet."""
        try:
            conn = Connection(
                self.server,
                authentication=SIMPLE,
                auto_bind=False,
                client_strategy=self.client_strategy,
            )
            conn.open()
            if self.cfg.starttls and not self.cfg.use_ssl:
                conn.start_tls()
        except LDAPException as e:
            raise DirectoryConnectionError.from_exception(f"Cannot connect to {self.cfg.url}", e) from e
        log.debug("Connected to %s", self.cfg.url)
        return conn

    def bind(self, conn: Connection, principal_dn: str, password: str) -> None:
        conn.user = principal_dn
        conn.password = password
        try:
            ok = bool(conn.bind())
        except LDAPCommunicationError as e:
            raise DirectoryConnectionError.from_exception(f"Connection lost while binding as {principal_dn}", e) from e
        except LDAPException as e:
            raise AuthError.from_exception(f"Bind as {principal_dn} failed", e) from e
        if not ok:
            raise AuthError.from_result(f"Bind as {principal_dn} rejected", conn.result)
        log.debug("Bound as %s", principal_dn)

    def unbind(self, conn: Connection | None) -> None:
        if conn is None:
            return
        try:
            conn.unbind()
        except Exception as e:
            log.warning("Unbind failed: %s", e)

    def admin_connection(self) -> Connection:
        """Connect and bind with the configured administrator credentials."""
        conn = self.connect()
        try:
            self.bind(conn, self.cfg.bind_dn, self.cfg.bind_password)
        except Exception:
            self.unbind(conn)
            raise
        return conn

    @contextmanager
    def admin_session(self) -> Iterator[Connection]:
        conn = self.admin_connection()
        try:
            yield conn
        finally:
            self.unbind(conn)

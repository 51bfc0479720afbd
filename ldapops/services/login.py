from __future__ import annotations

import logging

from ..directory.client import DirectoryClient
from ..directory.errors import RESULT_INVALID_CREDENTIALS, AuthError
from ..directory.models import LoginResult

log = logging.getLogger(__name__)


def verify_login(client: DirectoryClient, user_dn: str, password: str) -> LoginResult:
    """Check a user's credentials by binding as that user on a fresh connection.

    A rejected bind is an ordinary outcome (success=False). Only failing to
    reach the directory raises (DirectoryConnectionError).
    """
    if not password:
        # An empty simple bind would be an anonymous bind.
        log.warning("Login check for %s refused: empty password", user_dn)
        return LoginResult(
            success=False,
            error={
                "code": RESULT_INVALID_CREDENTIALS,
                "name": "invalidCredentials",
                "message": "Empty password",
            },
        )

    conn = client.connect()
    try:
        client.bind(conn, user_dn, password)
    except AuthError as e:
        log.warning("User login failed for %s: %s", user_dn, e)
        return LoginResult(success=False, error=e.to_dict())
    finally:
        client.unbind(conn)

    log.info("User login successful: %s", user_dn)
    return LoginResult(success=True)

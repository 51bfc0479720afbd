from __future__ import annotations

from typing import Any

RESULT_INVALID_CREDENTIALS = 49
RESULT_ENTRY_ALREADY_EXISTS = 68


class DirectoryError(Exception):
    """Base class for failures reported by (or on the way to) the directory.

    code/description mirror the LDAP result of the failed operation when one
    exists (e.g. 49 / invalidCredentials); both are None for transport failures.
    """

    def __init__(self, message: str, *, code: int | None = None, description: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.description = description

    @classmethod
    def from_result(cls, what: str, result: dict | None) -> "DirectoryError":
        res = dict(result or {})
        desc = res.get("description") or "unknown error"
        detail = res.get("message") or ""
        msg = f"{what}: {desc}"
        if detail:
            msg += f" ({detail})"
        return cls(msg, code=res.get("result"), description=res.get("description"))

    @classmethod
    def from_exception(cls, what: str, exc: Exception) -> "DirectoryError":
        return cls(f"{what}: {exc}")

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "name": self.description, "message": self.message}


class DirectoryConnectionError(DirectoryError):
    """The directory could not be reached (socket, TLS, StartTLS)."""


class AuthError(DirectoryError):
    """Bind rejected."""


class OperationError(DirectoryError):
    pass


class AddError(OperationError):
    pass


class ModifyError(OperationError):
    pass


class DeleteError(OperationError):
    pass


class SearchError(OperationError):
    pass


def is_already_exists(result: dict | None) -> bool:
    res = dict(result or {})
    return res.get("result") == RESULT_ENTRY_ALREADY_EXISTS or res.get("description") == "entryAlreadyExists"

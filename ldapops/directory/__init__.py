"""Directory (LDAP) client package.

Public API:
    - DirectoryConfig, UserEntry, OperationResult, LoginResult, SearchRecord
    - DirectoryClient
    - the DirectoryError hierarchy
"""

from .models import DirectoryConfig, UserEntry, OperationResult, LoginResult, SearchRecord
from .client import DirectoryClient
from .errors import (
    DirectoryError,
    DirectoryConnectionError,
    AuthError,
    OperationError,
    AddError,
    ModifyError,
    DeleteError,
    SearchError,
)

__all__ = [
    "DirectoryConfig",
    "UserEntry",
    "OperationResult",
    "LoginResult",
    "SearchRecord",
    "DirectoryClient",
    "DirectoryError",
    "DirectoryConnectionError",
    "AuthError",
    "OperationError",
    "AddError",
    "ModifyError",
    "DeleteError",
    "SearchError",
]

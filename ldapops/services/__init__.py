"""Application service layer.

Stable import surface for the sequencer and the HTTP routers:
    from ldapops.services import ...
"""

from .directory import directory_cfg_from_env, directory_client_from_env, managed_user_from_env
from .users import DEFAULT_FILTER, add_user, modify_user, delete_user, search_entries, user_filter
from .login import verify_login

__all__ = [
    "directory_cfg_from_env",
    "directory_client_from_env",
    "managed_user_from_env",
    "DEFAULT_FILTER",
    "add_user",
    "modify_user",
    "delete_user",
    "search_entries",
    "user_filter",
    "verify_login",
]

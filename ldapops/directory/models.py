from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .utils import first_rdn_value

# attribute name -> ordered values, one per search match
SearchRecord = Dict[str, List[str]]

USER_OBJECT_CLASSES = ["inetOrgPerson", "organizationalPerson", "person", "top"]


@dataclass
class DirectoryConfig:
    url: str
    bind_dn: str
    bind_password: str
    tls_verify: bool = False
    starttls: bool = False
    connect_timeout: Optional[float] = None

    @property
    def use_ssl(self) -> bool:
        return self.url.strip().lower().startswith("ldaps://")


@dataclass
class UserEntry:
    dn: str
    password: str
    mail: str
    cn: str = "Test User"
    sn: str = "User"
    object_classes: List[str] = field(default_factory=lambda: list(USER_OBJECT_CLASSES))

    @property
    def uid(self) -> str:
        return first_rdn_value(self.dn)

    def to_attributes(self) -> dict[str, Any]:
        return {
            "cn": self.cn,
            "sn": self.sn,
            "uid": self.uid,
            "mail": self.mail,
            "userPassword": self.password,
            "objectClass": list(self.object_classes),
        }


@dataclass
class OperationResult:
    ok: bool
    message: str
    status: str = "ok"  # "ok" | "warning"

    @property
    def warned(self) -> bool:
        return self.status == "warning"


@dataclass
class LoginResult:
    success: bool
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            out["error"] = self.error
        return out

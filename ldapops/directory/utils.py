from __future__ import annotations

import base64
from typing import Any


def escape_ldap_filter_value(value: str) -> str:
    """RFC 4515 escaping for LDAP filter values."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def split_dn(dn: str) -> list[str]:
    """Split a DN into its RDN strings, honouring backslash-escaped commas."""
    parts: list[str] = []
    cur: list[str] = []
    esc = False
    for ch in dn or "":
        if esc:
            cur.append(ch)
            esc = False
            continue
        if ch == "\\":
            cur.append(ch)
            esc = True
            continue
        if ch == ",":
            parts.append("".join(cur).strip())
            cur = []
            continue
        cur.append(ch)
    parts.append("".join(cur).strip())
    return [p for p in parts if p]


def base_dn_from_dn(dn: str) -> str:
    """Keep only the domain components of a DN.

    cn=admin,dc=example,dc=com -> dc=example,dc=com
    """
    return ",".join(p for p in split_dn(dn) if p.lower().startswith("dc="))


def first_rdn_value(dn: str) -> str:
    """Return the first RDN value of a DN (uid=testuser,dc=... -> testuser)."""
    parts = split_dn(dn)
    if not parts or "=" not in parts[0]:
        return ""
    _, val = parts[0].split("=", 1)
    # Unescape common DN escapes
    val = val.replace("\\,", ",").replace("\\+", "+").replace("\\=", "=").replace('\\"', '"')
    return val.strip()


# Credentials never leave the search layer.
HIDDEN_ATTRIBUTES = {"userpassword"}


def _decode_value(v: Any) -> str:
    if isinstance(v, (bytes, bytearray)):
        try:
            return bytes(v).decode("utf-8")
        except UnicodeDecodeError:
            return base64.b64encode(bytes(v)).decode("ascii")
    return str(v)


def entry_to_record(item: dict) -> dict[str, list[str]]:
    """Convert one ldap3 search response item into an attribute -> values mapping.

    Works from the raw wire values so the result does not depend on whether the
    server schema was loaded. Values that are not UTF-8 come back base64
    encoded; userPassword is dropped.
    """
    raw = item.get("raw_attributes") or {}
    record: dict[str, list[str]] = {}
    for name, values in raw.items():
        if str(name).lower() in HIDDEN_ATTRIBUTES:
            continue
        if not isinstance(values, (list, tuple)):
            values = [values]
        record[str(name)] = [_decode_value(v) for v in values]
    return record

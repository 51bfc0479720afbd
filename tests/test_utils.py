from __future__ import annotations

import base64

from ldapops.directory.utils import (
    base_dn_from_dn,
    entry_to_record,
    escape_ldap_filter_value,
    first_rdn_value,
    split_dn,
)
from ldapops.services import user_filter


def test_split_dn_keeps_escaped_commas():
    assert split_dn(r"cn=Doe\, John,ou=People,dc=example,dc=com") == [
        r"cn=Doe\, John",
        "ou=People",
        "dc=example",
        "dc=com",
    ]


def test_split_dn_ignores_blanks():
    assert split_dn("") == []
    assert split_dn("uid=a, dc=b ,") == ["uid=a", "dc=b"]


def test_base_dn_from_admin_dn():
    assert base_dn_from_dn("cn=admin,dc=example,dc=com") == "dc=example,dc=com"
    assert base_dn_from_dn("cn=admin,ou=ops,DC=corp,DC=local") == "DC=corp,DC=local"
    assert base_dn_from_dn("cn=admin,o=example") == ""


def test_first_rdn_value():
    assert first_rdn_value("uid=testuser,dc=example,dc=com") == "testuser"
    assert first_rdn_value(r"cn=Doe\, John,dc=example,dc=com") == "Doe, John"
    assert first_rdn_value("testuser") == ""


def test_filter_escaping():
    assert escape_ldap_filter_value("a*b(c)\\") == "a\\2ab\\28c\\29\\5c"
    assert user_filter("test*") == "(uid=test\\2a)"


def test_entry_to_record_decodes_raw_values():
    item = {
        "dn": "uid=testuser,dc=example,dc=com",
        "raw_attributes": {
            "uid": [b"testuser"],
            "mail": [b"a@example.com", b"b@example.com"],
            "jpegPhoto": [b"\xff\xd8\xff"],
            "userPassword": [b"secret"],
        },
    }

    rec = entry_to_record(item)

    assert rec["uid"] == ["testuser"]
    assert rec["mail"] == ["a@example.com", "b@example.com"]
    assert rec["jpegPhoto"] == [base64.b64encode(b"\xff\xd8\xff").decode("ascii")]
    assert "userPassword" not in rec
    assert "dn" not in rec


def test_entry_to_record_without_attributes():
    assert entry_to_record({"dn": "dc=example,dc=com"}) == {}

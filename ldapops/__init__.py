"""ldapops: admin-side lifecycle of one LDAP test user, as a CLI sequence and an HTTP API."""

__version__ = "0.1.0"

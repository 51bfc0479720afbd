from __future__ import annotations

from ..directory import DirectoryClient, DirectoryConfig, UserEntry
from ..env_settings import EnvSettings


def directory_cfg_from_env(env: EnvSettings) -> DirectoryConfig:
    return DirectoryConfig(
        url=env.ldap_url,
        bind_dn=env.ldap_admin_dn,
        bind_password=env.ldap_admin_password,
        tls_verify=env.tls_verify,
        starttls=env.ldap_starttls,
        connect_timeout=env.ldap_connect_timeout,
    )


def directory_client_from_env(env: EnvSettings) -> DirectoryClient:
    return DirectoryClient(directory_cfg_from_env(env))


def managed_user_from_env(env: EnvSettings) -> UserEntry:
    """The single entry this tool manages, as configured."""
    return UserEntry(
        dn=env.test_user_dn,
        password=env.test_user_password,
        mail=env.test_user_mail,
    )

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from .directory.utils import base_dn_from_dn, first_rdn_value


class EnvSettings(BaseSettings):
    # Directory
    ldap_url: str = Field(..., alias="LDAP_URL")
    ldap_admin_dn: str = Field(..., alias="LDAP_ADMIN_DN")
    ldap_admin_password: str = Field(..., alias="LDAP_ADMIN_PASSWORD")
    ldap_starttls: bool = Field(False, alias="LDAP_STARTTLS")
    ldap_connect_timeout: float | None = Field(None, alias="LDAP_CONNECT_TIMEOUT")

    # Managed test user
    test_user_dn: str = Field(..., alias="LDAP_TEST_USER_DN")
    test_user_password: str = Field(..., alias="LDAP_TEST_USER_PASSWORD")
    test_user_mail: str = Field("testuser@ibm.com", alias="LDAP_TEST_USER_MAIL")
    test_user_new_mail: str = Field("testuser_new@ibm.com", alias="LDAP_TEST_USER_NEW_MAIL")

    # App
    app_env: str = Field(
        "development",
        alias="APP_ENV",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV"),
    )
    port: int = Field(3000, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("", alias="LOG_DIR")

    class Config:
        populate_by_name = True
        env_file = ".env"
        extra = "ignore"

    @field_validator(
        "ldap_url", "ldap_admin_dn", "ldap_admin_password",
        "test_user_dn", "test_user_password",
    )
    @classmethod
    def _required(cls, v: str) -> str:
        s = (v or "").strip()
        if not s:
            raise ValueError("must not be blank")
        return s

    @field_validator("ldap_connect_timeout", mode="before")
    @classmethod
    def _blank_timeout(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("ldap_url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        if not v.lower().startswith(("ldap://", "ldaps://")):
            raise ValueError("LDAP_URL must start with ldap:// or ldaps://")
        return v

    @field_validator("ldap_admin_dn")
    @classmethod
    def _validate_admin_dn(cls, v: str) -> str:
        if not base_dn_from_dn(v):
            raise ValueError("LDAP_ADMIN_DN has no dc= components to derive the base DN from")
        return v

    @field_validator("test_user_dn")
    @classmethod
    def _validate_user_dn(cls, v: str) -> str:
        if not first_rdn_value(v):
            raise ValueError("LDAP_TEST_USER_DN must start with an attr=value RDN")
        return v

    @property
    def tls_verify(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @property
    def base_dn(self) -> str:
        return base_dn_from_dn(self.ldap_admin_dn)

    @property
    def test_user_uid(self) -> str:
        return first_rdn_value(self.test_user_dn)


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()

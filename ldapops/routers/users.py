from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from ldap3 import Connection
from pydantic import BaseModel, ConfigDict, Field

from ..deps import directory_session, get_directory_client, get_managed_user, get_settings
from ..directory import DirectoryClient, UserEntry
from ..env_settings import EnvSettings
from ..services import DEFAULT_FILTER, add_user, delete_user, modify_user, search_entries, user_filter, verify_login

log = logging.getLogger(__name__)

router = APIRouter()


class MessageOut(BaseModel):
    message: str


class CheckLoginIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_dn: str = Field(..., alias="userDN", min_length=1)
    password: str = Field("")


@router.post("/add-user", response_model=MessageOut)
def add_user_route(
    conn: Connection = Depends(directory_session),
    user: UserEntry = Depends(get_managed_user),
):
    res = add_user(conn, user)
    return {"message": res.message}


@router.post("/check-login")
def check_login_route(
    body: CheckLoginIn,
    _conn: Connection = Depends(directory_session),
    client: DirectoryClient = Depends(get_directory_client),
) -> dict:
    # Verified on its own connection; the request's admin session is not reused.
    return verify_login(client, body.user_dn, body.password).to_dict()


@router.put("/modify-user", response_model=MessageOut)
def modify_user_route(
    conn: Connection = Depends(directory_session),
    user: UserEntry = Depends(get_managed_user),
    env: EnvSettings = Depends(get_settings),
):
    res = modify_user(conn, user.dn, {"mail": [env.test_user_new_mail]})
    return {"message": res.message}


@router.delete("/delete-user", response_model=MessageOut)
def delete_user_route(
    conn: Connection = Depends(directory_session),
    user: UserEntry = Depends(get_managed_user),
):
    res = delete_user(conn, user.dn)
    return {"message": res.message}


@router.get("/search-users")
def search_users_route(
    uid: str = "",
    conn: Connection = Depends(directory_session),
    env: EnvSettings = Depends(get_settings),
) -> list[dict[str, list[str]]]:
    uid = (uid or "").strip()
    flt = user_filter(uid) if uid else DEFAULT_FILTER
    return search_entries(conn, env.base_dn, flt)

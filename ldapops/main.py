from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .directory import DirectoryClient, DirectoryError
from .env_settings import EnvSettings, get_env
from .routers.users import router as users_router
from .services import directory_client_from_env, managed_user_from_env

log = logging.getLogger(__name__)


def create_app(env: EnvSettings | None = None, client: DirectoryClient | None = None) -> FastAPI:
    """Build the HTTP app.

    Usable as a uvicorn factory (`uvicorn --factory ldapops.main:create_app`);
    settings are read from the environment when not passed in.
    """
    env = env or get_env()

    app = FastAPI(title="ldapops")
    app.state.env = env
    app.state.directory = client or directory_client_from_env(env)
    app.state.managed_user = managed_user_from_env(env)

    app.include_router(users_router)

    @app.exception_handler(DirectoryError)
    async def _directory_error(request: Request, exc: DirectoryError) -> JSONResponse:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

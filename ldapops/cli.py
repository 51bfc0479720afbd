"""Command-line interface for ldapops."""
from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from .env_settings import get_env
from .log_config import setup_logging
from .sequence import OperationSequencer
from .services import directory_client_from_env, managed_user_from_env

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ldapops", description="LDAP test user lifecycle")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("sequence", help="Run add / login / search / modify / search / delete / search once")

    serve = sub.add_parser("serve", help="Serve the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=None, help="Defaults to PORT (3000)")
    return parser


def run_sequence() -> int:
    env = get_env()
    seq = OperationSequencer(
        directory_client_from_env(env),
        managed_user_from_env(env),
        base_dn=env.base_dn,
        new_mail=env.test_user_new_mail,
    )
    report = seq.run()
    if not report.ok:
        log.error("Operation failed: %s", report.error)
        return 1
    log.info("Sequence completed: %d step(s)", len(report.steps))
    return 0


def serve(host: str, port: int | None) -> int:
    import uvicorn

    from .main import create_app

    env = get_env()
    port = port or env.port
    log.info("Server running on port %d", port)
    uvicorn.run(create_app(env), host=host, port=port, log_config=None)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        env = get_env()
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2
    setup_logging(env.log_level, env.log_dir)

    if args.command == "sequence":
        return run_sequence()
    return serve(args.host, args.port)

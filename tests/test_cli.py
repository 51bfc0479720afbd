from __future__ import annotations

from unittest.mock import ANY, patch

import pytest
from ldap3 import MOCK_SYNC

from ldapops.cli import main
from ldapops.directory import DirectoryClient, DirectoryConfig
from ldapops.env_settings import get_env

from constants import ADMIN_DN, ENV_VARS, LDAP_URL


@pytest.fixture(autouse=True)
def _fresh_env_cache():
    get_env.cache_clear()
    yield
    get_env.cache_clear()


@pytest.fixture
def environ(clean_environ):
    for k, v in ENV_VARS.items():
        clean_environ.setenv(k, v)
    return clean_environ


def test_invalid_configuration_exits_2(clean_environ, capsys):
    assert main(["sequence"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_sequence_succeeds(environ, client):
    with patch("ldapops.cli.setup_logging"), \
            patch("ldapops.cli.directory_client_from_env", return_value=client):
        assert main(["sequence"]) == 0


def test_sequence_fails_on_admin_bind(environ, server):
    cfg = DirectoryConfig(url=LDAP_URL, bind_dn=ADMIN_DN, bind_password="wrong")
    bad = DirectoryClient(cfg, server=server, client_strategy=MOCK_SYNC)

    with patch("ldapops.cli.setup_logging"), \
            patch("ldapops.cli.directory_client_from_env", return_value=bad):
        assert main(["sequence"]) == 1


def test_serve_uses_port_from_environment(environ):
    environ.setenv("PORT", "8081")

    with patch("ldapops.cli.setup_logging"), patch("uvicorn.run") as run:
        assert main(["serve"]) == 0
    run.assert_called_once_with(ANY, host="0.0.0.0", port=8081, log_config=None)


def test_serve_port_flag_wins(environ):
    with patch("ldapops.cli.setup_logging"), patch("uvicorn.run") as run:
        main(["serve", "--port", "9000"])
    assert run.call_args.kwargs["port"] == 9000

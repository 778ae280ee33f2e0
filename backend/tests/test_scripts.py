from __future__ import annotations

import pytest

from scripts import activity_report, grant_role

JANE = {"firstName": "Jane", "lastName": "Doe", "email": "jane@x.com", "password": "secret1"}


@pytest.fixture
def cli_settings(monkeypatch, settings):
    """Point the operator scripts at the same database the app fixture uses."""
    monkeypatch.setattr(grant_role, "get_settings", lambda: settings)
    monkeypatch.setattr(activity_report, "get_settings", lambda: settings)
    return settings


def test_grant_role_elevates_existing_user(client, cli_settings, capsys) -> None:
    client.post("/api/auth/signup", json=JANE)

    assert grant_role.main(["Jane@X.com", "admin"]) == 0
    assert "jane@x.com: user -> admin" in capsys.readouterr().out

    login = client.post("/api/auth/login", json={"email": "jane@x.com", "password": "secret1"})
    assert login.json()["data"]["role"] == "admin"


def test_grant_role_unknown_email(client, cli_settings, capsys) -> None:
    assert grant_role.main(["nobody@x.com", "admin"]) == 1
    assert "No user with email nobody@x.com" in capsys.readouterr().out


def test_grant_role_rejects_unknown_role(cli_settings) -> None:
    with pytest.raises(SystemExit):
        grant_role.main(["jane@x.com", "owner"])


def test_activity_report_for_user(client, cli_settings, capsys) -> None:
    client.post("/api/auth/signup", json=JANE)
    client.post("/api/auth/login", json={"email": "jane@x.com", "password": "secret1"})

    assert activity_report.main(["--user-email", "jane@x.com"]) == 0

    out = capsys.readouterr().out
    assert "Activity for jane@x.com" in out
    assert "SIGNUP" in out
    assert "LOGIN" in out


def test_activity_report_system_wide_with_purge(client, cli_settings, capsys) -> None:
    client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "whatever"})

    assert activity_report.main(["--purge"]) == 0

    out = capsys.readouterr().out
    assert "Purged 0 entries" in out
    assert "LOGIN_FAILED" in out

import datetime as dt
import subprocess

from licensefetch_cli import identity as identity_mod
from licensefetch_cli.identity import GitIdentityProvider, StaticIdentityProvider, default_year, system_user_name


def test_default_year_uses_current_year():
    assert default_year(dt.date(2026, 10, 16)) == "2026-present"
    assert default_year() == f"{dt.date.today().year}-present"


def test_git_name_wins(monkeypatch):
    monkeypatch.setattr(identity_mod, "read_git_config", lambda key: "Git Person")

    assert GitIdentityProvider().author_name() == "Git Person"


def test_falls_back_to_system_user(monkeypatch):
    monkeypatch.setattr(identity_mod, "read_git_config", lambda key: "")
    monkeypatch.setattr(identity_mod, "system_user_name", lambda: "localuser")

    assert GitIdentityProvider().author_name() == "localuser"


def test_read_git_config_without_git(monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(subprocess, "run", missing)

    assert identity_mod.read_git_config("user.name") == ""


def test_system_user_name_reads_environment():
    assert system_user_name({"USERNAME": "winuser"}) == "winuser"
    assert system_user_name({"USER": " ", "LOGNAME": "logname"}) == "logname"
    assert system_user_name({}, getuser=lambda: "pwuser") == "pwuser"


def test_static_provider():
    assert StaticIdentityProvider("Fixed").author_name() == "Fixed"
    assert StaticIdentityProvider().author_name() == ""


def test_system_user_lookup_failure_is_empty():
    def no_user():
        raise OSError("No username set in the environment")

    assert system_user_name({}, getuser=no_user) == ""


def test_git_config_in_latin1_is_decoded(monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout=b"Jos\xe9\n", stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert identity_mod.read_git_config("user.name") == "Jos\xe9"


def test_git_config_in_utf8_is_decoded(monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="Zoë Ångström\n".encode("utf-8"), stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert GitIdentityProvider().author_name() == "Zoë Ångström"

"""Default author and year resolution."""
from __future__ import annotations

import datetime as _dt
import getpass
import logging
import os
import subprocess
from typing import Callable, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

USER_ENV_VARS = ("USER", "USERNAME", "LOGNAME")


class IdentityProvider(Protocol):
    def author_name(self) -> str:
        ...


def decode_config_value(raw: bytes) -> str:
    """Decode git output as UTF-8, or Latin-1 for configs written by older tools."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def read_git_config(key: str) -> str:
    try:
        completed = subprocess.run(
            ["git", "config", "--get", key],
            check=True,
            capture_output=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""
    return decode_config_value(completed.stdout).strip()


def system_user_name(
    environ: Optional[Mapping[str, str]] = None,
    getuser: Callable[[], str] = getpass.getuser,
) -> str:
    env = os.environ if environ is None else environ
    for var in USER_ENV_VARS:
        value = env.get(var, "").strip()
        if value:
            return value
    try:
        return getuser()
    except (KeyError, OSError):
        return ""


class GitIdentityProvider:
    """git ``user.name`` first, then the invoking OS user, else empty."""

    def author_name(self) -> str:
        name = read_git_config("user.name")
        if name:
            return name
        logger.debug("git user.name is not set; falling back to the system user")
        return system_user_name()


class StaticIdentityProvider:
    def __init__(self, name: str = "") -> None:
        self.name = name

    def author_name(self) -> str:
        return self.name


def default_year(today: Optional[_dt.date] = None) -> str:
    today = today or _dt.date.today()
    return f"{today.year}-present"

"""Read MySQL client credentials from an option file such as ~/.my.cnf."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

CLIENT_SECTION = "[client]"


@dataclass(frozen=True)
class MysqlCredentials:
    user: str
    password: str


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_client_credentials(text: str) -> MysqlCredentials | None:
    user: str | None = None
    password: str | None = None
    in_client = False
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", ";")):
            continue
        if line.startswith("["):
            in_client = line.lower() == CLIENT_SECTION
            continue
        if not in_client or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip().lower()
        if key == "user" and user is None:
            user = _unquote(value.strip())
        elif key == "password" and password is None:
            password = _unquote(value.strip())
        if user is not None and password is not None:
            return MysqlCredentials(user=user, password=password)
    return None


def read_client_credentials(path: str | Path) -> MysqlCredentials | None:
    cnf = Path(path).expanduser()
    try:
        text = cnf.read_text(encoding="utf-8")
    except OSError as err:
        logging.error("Could not read %s: %s", cnf, err)
        return None
    creds = parse_client_credentials(text)
    if creds is None:
        logging.error("No [client] user/password pair found in %s", cnf)
    return creds

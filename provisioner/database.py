"""MySQL helpers used by the provisioning workflow."""

from __future__ import annotations

import logging
import os
import subprocess

from config import MYSQL_BIN
from .credentials import MysqlCredentials
from .utils import log


def _mysql_try(sql: str, creds: MysqlCredentials) -> tuple[int, str, str]:
    env = dict(os.environ)
    env["MYSQL_PWD"] = creds.password
    try:
        proc = subprocess.run(
            [MYSQL_BIN, f"--user={creds.user}", "-e", sql],
            text=True,
            capture_output=True,
            check=True,
            env=env,
        )
        return proc.returncode, (proc.stdout or ""), (proc.stderr or "")
    except subprocess.CalledProcessError as exc:
        return exc.returncode, (exc.stdout or ""), (exc.stderr or "")
    except FileNotFoundError as exc:
        return 127, "", str(exc)


def run_mysql(sql: str, creds: MysqlCredentials) -> bool:
    rc, out, err = _mysql_try(sql, creds)
    msg = f"SQL: {sql}\nEXIT: {rc}\nSTDOUT: {out.strip()}\nSTDERR: {err.strip()}"
    if rc == 0:
        log(f"PASS: {msg}")
        return True
    logging.error(msg)
    return False


def create_database(name: str, creds: MysqlCredentials) -> bool:
    """Create the schema; any failure is treated as "already exists"."""
    if run_mysql(f"CREATE DATABASE IF NOT EXISTS `{name}`;", creds):
        return True
    logging.warning("Database %s not created; assuming it already exists", name)
    return True

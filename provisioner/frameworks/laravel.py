"""Laravel projects: composer scaffold and .env database settings."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from config import COMPOSER_BIN, LARAVEL_PACKAGE, PHP_BIN
from ..credentials import MysqlCredentials
from ..git import init_repository
from ..project import ProjectNames
from ..utils import log, try_cmd
from .base import Framework


NEEDS_QUOTES = re.compile(r"[\s#\"'$\\]")


def env_value(value: str) -> str:
    # phpdotenv: bare values cannot hold spaces and " #" starts a comment
    if not NEEDS_QUOTES.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def set_env_values(text: str, values: dict[str, str]) -> str:
    """Rewrite KEY=value lines, uncommenting "# KEY=" and appending misses."""
    out = text
    for key, value in values.items():
        pattern = re.compile(rf"^[ \t]*(?:#[ \t]*)?{re.escape(key)}[ \t]*=.*$", re.MULTILINE)
        line = f"{key}={env_value(value)}"
        if pattern.search(out):
            out = pattern.sub(lambda _m: line, out, count=1)
            continue
        if out and not out.endswith("\n"):
            out += "\n"
        out += line + "\n"
    return out


class Laravel(Framework):
    name = "laravel"
    label = "Laravel"

    def scaffold(self, names: ProjectNames, path: Path) -> bool:
        if not try_cmd(
            [COMPOSER_BIN, "create-project", LARAVEL_PACKAGE, path.name],
            cwd=path.parent,
        ):
            return False
        return init_repository(path)

    def document_root(self, path: Path) -> Path:
        return path / "public"

    def _ensure_env_file(self, path: Path) -> bool:
        env_file = path / ".env"
        if env_file.exists():
            return True
        example = path / ".env.example"
        if not example.exists():
            logging.error("Neither .env nor .env.example found in %s", path)
            return False
        try:
            shutil.copyfile(example, env_file)
        except OSError as err:
            logging.error("Could not create %s: %s", env_file, err)
            return False
        log(f"PASS: Created {env_file} from .env.example")
        return try_cmd([PHP_BIN, "artisan", "key:generate"], cwd=path)

    def configure_database(
        self, names: ProjectNames, path: Path, creds: MysqlCredentials
    ) -> bool:
        if not self._ensure_env_file(path):
            return False
        env_file = path / ".env"
        values = {
            "DB_DATABASE": names.database,
            "DB_USERNAME": creds.user,
            "DB_PASSWORD": creds.password,
        }
        try:
            env_file.write_text(set_env_values(env_file.read_text(), values))
        except OSError as err:
            logging.error("Could not update %s: %s", env_file, err)
            return False
        log(f"PASS: Database settings written to {env_file}")
        return True

"""WordPress projects driven through WP-CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from config import DEFAULT_WP_EMAIL, DEFAULT_WP_PASS, DEFAULT_WP_USER, WP_CLI_PATH
from ..credentials import MysqlCredentials
from ..project import ProjectNames
from ..utils import log, try_cmd
from .base import Framework


def wp_cmd(path: Path, args: list[str]) -> bool:
    return try_cmd([WP_CLI_PATH, *args], cwd=path)


class WordPress(Framework):
    name = "wp"
    label = "WordPress"

    def scaffold(self, names: ProjectNames, path: Path) -> bool:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            logging.error("Could not create or access %s: %s", path, err)
            return False
        return wp_cmd(path, ["core", "download"])

    def configure_database(
        self, names: ProjectNames, path: Path, creds: MysqlCredentials
    ) -> bool:
        if not (path / "wp-config.php").exists():
            if not wp_cmd(
                path,
                [
                    "config",
                    "create",
                    f"--dbname={names.database}",
                    f"--dbuser={creds.user}",
                    f"--dbpass={creds.password}",
                    "--skip-check",
                ],
            ):
                return False
        if not wp_cmd(path, ["db", "create"]):
            log(f"INFO: wp db create failed; assuming {names.database} exists")
        if not wp_cmd(
            path,
            [
                "core",
                "install",
                f"--url=https://{names.domain}",
                f"--title={names.clean}",
                f"--admin_user={DEFAULT_WP_USER}",
                f"--admin_password={DEFAULT_WP_PASS}",
                f"--admin_email={DEFAULT_WP_EMAIL}",
                "--skip-email",
            ],
        ):
            return False
        log(f"PASS: WordPress configured for {names.domain}")
        return True

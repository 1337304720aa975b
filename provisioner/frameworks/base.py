"""Per-framework steps plugged into the shared provisioning workflow."""

from __future__ import annotations

from pathlib import Path

from config import COMPOSER_BIN, NPM_BIN
from ..credentials import MysqlCredentials
from ..project import ProjectNames
from ..utils import log, try_cmd


class Framework:
    """A framework adapter.

    The workflow only talks to these methods; everything else (cloning,
    database creation, site registration) is shared.
    """

    name = ""
    label = ""

    def scaffold(self, names: ProjectNames, path: Path) -> bool:
        raise NotImplementedError

    def configure_database(
        self, names: ProjectNames, path: Path, creds: MysqlCredentials
    ) -> bool:
        raise NotImplementedError

    def document_root(self, path: Path) -> Path:
        return path

    def install_dependencies(self, path: Path) -> bool:
        if (path / "composer.json").exists():
            if not try_cmd([COMPOSER_BIN, "install"], cwd=path):
                return False
        if (path / "package.json").exists():
            if not try_cmd([NPM_BIN, "install"], cwd=path):
                return False
        log(f"PASS: Dependencies installed in {path}")
        return True

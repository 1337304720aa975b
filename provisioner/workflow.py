"""Provision, clone or remove a local development site.

Inputs: a framework adapter, derived project names and a mode.
Side effects: project directory, MySQL schema, Apache site file, TLS
certificate and hosts entries. Removal deletes the directory, site file and
hosts entries but keeps the database.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable

import httpx

from config import MYSQL_CNF, PROJECTS_DIR
from . import apache, certs, git, github, hosts
from .credentials import MysqlCredentials, read_client_credentials
from .database import create_database
from .frameworks import Framework
from .project import ProjectNames
from .utils import is_safe_child, log, status_fail, status_pass

MODE_NEW = "new"
MODE_DELETE = "delete"
MODE_UPDATE = "update"
MODE_CLONE = "clone"


def project_path(names: ProjectNames) -> Path:
    return Path(PROJECTS_DIR).expanduser() / names.folder


def confirmed(answer: str) -> bool:
    return answer.strip()[:1] in ("y", "Y")


# ─── Create / clone ──────────────────────────────────────────────────────
def preflight(names: ProjectNames) -> bool:
    path = project_path(names)
    if path.exists():
        status_fail(f"{path} already exists; use --delete first")
        return False
    return True


def _ensure_projects_root() -> bool:
    root = Path(PROJECTS_DIR).expanduser()
    try:
        root.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as err:
        logging.error("Could not create %s: %s", root, err)
        return False


def step_scaffold(framework: Framework, names: ProjectNames) -> bool:
    if not _ensure_projects_root():
        return False
    return framework.scaffold(names, project_path(names))


def step_clone(names: ProjectNames) -> bool | None:
    """Clone the upstream repository.

    Returns None when the repository does not exist upstream.
    """
    try:
        exists = github.repo_exists(names.clean)
    except (httpx.HTTPError, ValueError) as err:
        logging.error("Repository lookup failed for %s: %s", names.clean, err)
        return False
    if not exists:
        return None
    if not _ensure_projects_root():
        return False
    return git.clone(github.clone_url(names.clean), project_path(names))


def step_database(
    framework: Framework, names: ProjectNames, creds: MysqlCredentials
) -> bool:
    if not create_database(names.database, creds):
        return False
    status_pass(f"database {names.database}")
    if not framework.configure_database(names, project_path(names), creds):
        return False
    status_pass(f"{framework.label} database config")
    return True


def register_site(
    framework: Framework, names: ProjectNames, creds: MysqlCredentials
) -> bool:
    if not certs.generate_certificate(names.domain):
        status_fail(f"certificate for {names.domain}")
        return False
    status_pass("certificate")
    docroot = framework.document_root(project_path(names))
    db_env = {
        "DB_DATABASE": names.database,
        "DB_USERNAME": creds.user,
        "DB_PASSWORD": creds.password,
    }
    if not apache.write_vhost(names.domain, docroot, db_env):
        status_fail("apache write")
        return False
    status_pass("apache write")
    if not hosts.add_host(names.domain):
        status_fail("hosts add")
        return False
    status_pass("hosts add")
    if not apache.test_config():
        status_fail("apache configtest")
        return False
    if not apache.restart_apache():
        status_fail("apache restart")
        return False
    status_pass("apache restart")
    return True


def finish_setup(framework: Framework, names: ProjectNames) -> bool:
    if not framework.install_dependencies(project_path(names)):
        status_fail("dependency install")
        return False
    status_pass("dependencies")
    creds = read_client_credentials(MYSQL_CNF)
    if creds is None:
        status_fail(f"no MySQL client credentials in {MYSQL_CNF}")
        return False
    if not step_database(framework, names, creds):
        return False
    if not register_site(framework, names, creds):
        return False
    status_pass(f"{names.domain} ready at https://{names.domain}")
    return True


# ─── Delete ──────────────────────────────────────────────────────────────
def remove_project_dir(names: ProjectNames) -> bool:
    path = project_path(names)
    if not path.exists():
        log(f"INFO: {path} not found (skip)")
        return True
    if not is_safe_child(path, Path(PROJECTS_DIR).expanduser(), names.folder):
        status_fail(f"unsafe remove path {path}")
        return False
    try:
        shutil.rmtree(path)
    except OSError as err:
        logging.error("Could not remove %s: %s", path, err)
        status_fail(f"could not remove {path}")
        return False
    log(f"PASS: Removed project directory {path}")
    return True


def delete_project(names: ProjectNames, ask: Callable[[str], str]) -> bool:
    try:
        answer = ask(f"Delete {names.folder} and its site config? [y/N] ")
    except EOFError:
        answer = ""
    if not confirmed(answer):
        status_pass("delete aborted; nothing changed")
        return True
    if not remove_project_dir(names):
        return False
    status_pass("project dir remove")
    if not apache.remove_vhost(names.domain):
        status_fail("apache remove")
        return False
    status_pass("apache remove")
    if not hosts.remove_host(names.domain):
        status_fail("hosts remove")
        return False
    status_pass("hosts remove")
    if not apache.test_config():
        status_fail("apache configtest")
        return False
    if not apache.restart_apache():
        status_fail("apache restart")
        return False
    status_pass("apache restart")
    status_pass(
        f"{names.domain} removed; database {names.database} kept (drop it manually)"
    )
    return True


# ─── Entry ───────────────────────────────────────────────────────────────
def provision(
    framework: Framework,
    names: ProjectNames,
    mode: str = MODE_CLONE,
    ask: Callable[[str], str] = input,
) -> bool:
    log(f"provision framework={framework.name} domain={names.domain} mode={mode}")
    if mode == MODE_UPDATE:
        logging.warning("update mode is not implemented; nothing to do")
        status_pass(f"update {names.domain}: not implemented, nothing changed")
        return True
    if mode == MODE_DELETE:
        return delete_project(names, ask)
    if mode not in (MODE_NEW, MODE_CLONE):
        status_fail(f"unknown mode {mode}")
        return False

    if not preflight(names):
        return False
    if mode == MODE_NEW:
        if not step_scaffold(framework, names):
            status_fail(f"{framework.label} scaffold")
            return False
        status_pass(f"{framework.label} scaffold")
    else:
        cloned = step_clone(names)
        if cloned is None:
            print(
                f"Repository {github.GITHUB_OWNER}/{names.clean} not found; "
                "re-run with --new to create it"
            )
            return True
        if not cloned:
            status_fail(f"clone {names.clean}")
            return False
        status_pass(f"clone {names.clean}")
    return finish_setup(framework, names)

"""Create/remove Apache virtual hosts.

Each site gets one file in APACHE_SITES_DIR holding its HTTP and HTTPS
virtual hosts. Hosts entries are written by provisioner.hosts.
"""

from __future__ import annotations

import logging
from pathlib import Path

from config import APACHE_SITES_DIR, APACHECTL
from .certs import cert_paths
from .utils import log, try_cmd

ENV_KEYS = ("DB_DATABASE", "DB_USERNAME", "DB_PASSWORD")


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _env_block(db_env: dict[str, str]) -> str:
    lines = []
    for key in ENV_KEYS:
        if key in db_env:
            lines.append(f"    SetEnv {key} {_quote(db_env[key])}")
    return "\n".join(lines)


def render_vhost(domain: str, document_root: Path, db_env: dict[str, str]) -> str:
    cert, key = cert_paths(domain)
    env = _env_block(db_env)
    return f"""<VirtualHost *:80>
    ServerName {domain}
    DocumentRoot "{document_root}"
{env}
    <Directory "{document_root}">
        Options Indexes FollowSymLinks
        AllowOverride All
        Require all granted
    </Directory>
</VirtualHost>

<VirtualHost *:443>
    ServerName {domain}
    DocumentRoot "{document_root}"
{env}
    SSLEngine on
    SSLCertificateFile "{cert}"
    SSLCertificateKeyFile "{key}"
    <Directory "{document_root}">
        Options Indexes FollowSymLinks
        AllowOverride All
        Require all granted
    </Directory>
</VirtualHost>
"""


def vhost_path(domain: str) -> Path:
    return Path(APACHE_SITES_DIR) / f"{domain}.conf"


def write_vhost(domain: str, document_root: Path, db_env: dict[str, str]) -> bool:
    conf_path = vhost_path(domain)
    try:
        conf_path.parent.mkdir(parents=True, exist_ok=True)
        conf_path.write_text(render_vhost(domain, document_root, db_env))
    except OSError as err:
        logging.error("Could not write %s: %s", conf_path, err)
        return False
    log(f"PASS: Created Apache config for {domain}")
    return True


def remove_vhost(domain: str) -> bool:
    conf_path = vhost_path(domain)
    if not conf_path.exists():
        log(f"INFO: conf not found (skip): {conf_path}")
        return True
    try:
        conf_path.unlink()
    except OSError as err:
        logging.error("Could not remove %s: %s", conf_path, err)
        return False
    log(f"PASS: Removed Apache config for {domain}")
    return True


def test_config() -> bool:
    return try_cmd(["sudo", APACHECTL, "configtest"])


def restart_apache() -> bool:
    return try_cmd(["sudo", APACHECTL, "-k", "restart"])

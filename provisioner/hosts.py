"""Manage project entries in the hosts file safely and atomically.

Each project gets one IPv4 and one IPv6 loopback line tagged "# provision".
Removal drops every line whose host names include the domain. Other lines
and comments are preserved intact.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from config import HOSTS_FILE, LOCALHOST_IP, LOCALHOST_IP6
from .utils import log

TAG = "# provision"


def _read_hosts() -> tuple[list[str], int, int, int]:
    path = Path(HOSTS_FILE)
    if not path.exists():
        return [], 0o644, os.getuid(), os.getgid()
    st = path.stat()
    lines = path.read_text().splitlines(keepends=True)
    return lines, st.st_mode, st.st_uid, st.st_gid


def _write_hosts_atomic(lines: list[str], mode: int, uid: int, gid: int) -> bool:
    path = Path(HOSTS_FILE)
    try:
        with tempfile.NamedTemporaryFile(mode="w", delete=False, dir=str(path.parent)) as tmp:
            tmp.writelines(lines)
            tmp.flush()
            os.fsync(tmp.fileno())
            tmp_path = tmp.name
        os.chmod(tmp_path, stat.S_IMODE(mode))
        if (uid, gid) != (os.getuid(), os.getgid()):
            os.chown(tmp_path, uid, gid)
        os.replace(tmp_path, str(path))
        return True
    except OSError as err:
        logging.error("Could not write hosts file %s: %s", path, err)
        return False


def _names_domain(line: str, domain: str) -> bool:
    body = line.split("#", 1)[0].split()
    return len(body) > 1 and domain in body[1:]


def host_lines(domain: str) -> list[str]:
    return [f"{ip} {domain} {TAG}\n" for ip in (LOCALHOST_IP, LOCALHOST_IP6)]


def add_host(domain: str) -> bool:
    lines, mode, uid, gid = _read_hosts()
    desired = host_lines(domain)
    if all(entry in lines for entry in desired):
        log(f"INFO: {domain} already in hosts file")
        return True

    kept = []
    for line in lines:
        if not _names_domain(line, domain):
            kept.append(line)
            continue
        if line not in desired:
            logging.warning("Replacing hosts entry for %s: %s", domain, line.rstrip("\n"))
    if kept and not kept[-1].endswith("\n"):
        kept[-1] += "\n"
    kept.extend(desired)
    if not _write_hosts_atomic(kept, mode, uid, gid):
        return False
    log(f"PASS: Added {domain} to hosts file")
    return True


def remove_host(domain: str) -> bool:
    lines, mode, uid, gid = _read_hosts()
    kept = [line for line in lines if not _names_domain(line, domain)]
    if len(kept) == len(lines):
        log(f"INFO: {domain} not in hosts file")
        return True
    if not _write_hosts_atomic(kept, mode, uid, gid):
        return False
    log(f"PASS: Removed {domain} from hosts file")
    return True

"""Git client operations."""

from __future__ import annotations

from pathlib import Path

from .utils import log, try_cmd


def clone(url: str, dest: Path) -> bool:
    if not try_cmd(["git", "clone", url, str(dest)]):
        return False
    log(f"PASS: Cloned {url} into {dest}")
    return True


def init_repository(path: Path, message: str = "Initial commit") -> bool:
    for args in (["git", "init"], ["git", "add", "-A"], ["git", "commit", "-m", message]):
        if not try_cmd(args, cwd=path):
            return False
    log(f"PASS: Initialized git repository in {path}")
    return True

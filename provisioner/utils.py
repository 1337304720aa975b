"""Utility helpers kept dependency-free.

- init_logging: configure console + file logging with run-id.
- status_pass/status_fail: concise console status lines (with run-id).
- run_cmd: thin wrapper over subprocess.run with check + text enabled.
- try_cmd: run_cmd that logs failures and returns a bool.
- log: debug-level logger for normal status lines (file-oriented).
- is_safe_child: resolved-path guard used before destructive removals.
"""

import logging
import os
import subprocess
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Mapping, Sequence

from config import LOG_DIR


_RUN_ID = ""


def _gen_run_id() -> str:
    return uuid.uuid4().hex[:8]


def init_logging(run_id: str | None = None, debug: bool = False) -> str:
    """Initialize logging with console + rotating file handlers.

    - Console: CRITICAL only unless debug, status lines go through print.
    - File: DEBUG+, rich format, written to LOG_DIR/provision-<rid>.log
    Returns the run-id used.
    """
    global _RUN_ID
    if _RUN_ID:
        return _RUN_ID

    rid = run_id or os.environ.get("PROVISION_RID") or _gen_run_id()
    _RUN_ID = rid

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        logfile = os.path.join(LOG_DIR, f"provision-{rid}.log")
    except OSError:
        logfile = os.path.abspath(f"provision-{rid}.log")

    console_level = logging.DEBUG if debug else logging.CRITICAL
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setLevel(console_level)

    has_file = any(
        isinstance(h, RotatingFileHandler)
        and getattr(h, "baseFilename", "").endswith(os.path.basename(logfile))
        for h in root.handlers
    )
    if not has_file:
        fh = RotatingFileHandler(logfile, maxBytes=5 * 1024 * 1024, backupCount=3)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        root.addHandler(fh)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )
    if not has_console:
        ch = logging.StreamHandler()
        ch.setLevel(console_level)
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(ch)

    logging.debug("Logging initialized. run_id=%s file=%s", rid, logfile)
    os.environ["PROVISION_RID"] = rid
    return rid


def _rid() -> str:
    return _RUN_ID or os.environ.get("PROVISION_RID", "--------")


def status_pass(msg: str) -> None:
    print(f"PASS: {msg} [{_rid()}]")


def status_fail(msg: str) -> None:
    print(f"FAIL: {msg} [{_rid()}]", flush=True)


def log(msg: str) -> None:
    # File-oriented normal progress; stays out of console noise.
    logging.debug(msg)


def run_cmd(
    args: Sequence[str],
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    log(f"RUN: {' '.join(str(a) for a in args)}" + (f" (cwd={cwd})" if cwd else ""))
    subprocess.run(
        [str(a) for a in args],
        check=True,
        text=True,
        cwd=str(cwd) if cwd else None,
        env=dict(env) if env is not None else None,
    )


def try_cmd(
    args: Sequence[str],
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> bool:
    try:
        run_cmd(args, cwd=cwd, env=env)
        return True
    except subprocess.CalledProcessError as err:
        logging.error("Command failed: %s exit=%s", " ".join(str(a) for a in args), err.returncode)
        return False
    except FileNotFoundError as err:
        logging.error("Command not found: %s (%s)", args[0], err)
        return False


def is_safe_child(path: Path, root: str | Path, name: str) -> bool:
    try:
        resolved = path.resolve()
        base = Path(root).resolve()
    except OSError:
        return False
    return resolved.is_relative_to(base) and resolved != base and resolved.name == name

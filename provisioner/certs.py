"""Local TLS certificates issued by mkcert."""

from __future__ import annotations

import logging
from pathlib import Path

from config import CERT_DIR, MKCERT_BIN
from .utils import log, try_cmd


def cert_paths(domain: str) -> tuple[Path, Path]:
    base = Path(CERT_DIR)
    return base / f"{domain}.pem", base / f"{domain}-key.pem"


def generate_certificate(domain: str) -> bool:
    cert, key = cert_paths(domain)
    try:
        cert.parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        logging.error("Could not create %s: %s", cert.parent, err)
        return False
    ok = try_cmd([MKCERT_BIN, "-cert-file", str(cert), "-key-file", str(key), domain])
    if ok:
        log(f"PASS: Issued certificate for {domain}")
    return ok

"""Upstream repository lookups against the GitHub REST API."""

from __future__ import annotations

import httpx

from config import GIT_CLONE_URL, GITHUB_API, GITHUB_OWNER, GITHUB_TIMEOUT, GITHUB_TOKEN
from .utils import log


def _headers() -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    if GITHUB_TOKEN:
        headers["Authorization"] = f"Bearer {GITHUB_TOKEN}"
    return headers


def repo_exists(name: str, owner: str | None = None) -> bool:
    """Return True when owner/name exists, False on 404.

    Any other status raises httpx.HTTPStatusError; transport problems raise
    httpx.HTTPError subclasses.
    """
    owner = owner or GITHUB_OWNER
    if not owner:
        raise ValueError("GitHub owner is not configured (PROVISION_GITHUB_OWNER)")
    with httpx.Client(base_url=GITHUB_API, timeout=GITHUB_TIMEOUT) as client:
        resp = client.get(f"/repos/{owner}/{name}", headers=_headers())
    log(f"GitHub lookup {owner}/{name}: {resp.status_code}")
    if resp.status_code == httpx.codes.NOT_FOUND:
        return False
    resp.raise_for_status()
    return True


def clone_url(name: str, owner: str | None = None) -> str:
    return GIT_CLONE_URL.format(owner=owner or GITHUB_OWNER, name=name)

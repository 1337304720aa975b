"""Canonical names derived from a project's domain-like name."""

from __future__ import annotations

from dataclasses import dataclass

from config import LOCAL_TLD


@dataclass(frozen=True)
class ProjectNames:
    raw: str
    clean: str
    domain: str
    folder: str
    database: str


def derive_names(raw: str, tld: str = LOCAL_TLD) -> ProjectNames:
    """Derive every identifier a project needs from one name.

    "api.example.com" -> clean "api.example" (upstream repository name),
    domain "api.example.test", folder "api-example-test" and database
    "api_example_test".
    """
    name = (raw or "").strip()
    if not name:
        raise ValueError("project name must not be empty")
    clean = name.rsplit(".", 1)[0] if "." in name else name
    domain = f"{clean}.{tld}"
    return ProjectNames(
        raw=name,
        clean=clean,
        domain=domain,
        folder=domain.replace(".", "-"),
        database=domain.replace(".", "_"),
    )

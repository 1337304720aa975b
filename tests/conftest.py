from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

import pytest

from provisioner import apache, certs, github, hosts, utils, workflow


class FakeRun:
    """Stand-in for subprocess.run that records argv and cwd."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], str | None]] = []
        self.failing: set[tuple[str, ...]] = set()
        self.hooks: dict[tuple[str, ...], Callable[[list[str], str | None], None]] = {}

    def fail_on(self, *prefix: str) -> None:
        self.failing.add(prefix)

    def on(self, *prefix: str, do: Callable[[list[str], str | None], None]) -> None:
        self.hooks[prefix] = do

    def __call__(self, args, **kwargs):
        argv = [str(a) for a in args]
        cwd = kwargs.get("cwd")
        self.calls.append((argv, cwd))
        for prefix in self.failing:
            if tuple(argv[: len(prefix)]) == prefix:
                raise subprocess.CalledProcessError(1, argv, output="", stderr="boom")
        for prefix, hook in self.hooks.items():
            if tuple(argv[: len(prefix)]) == prefix:
                hook(argv, cwd)
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

    def argvs(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]

    def ran(self, *prefix: str) -> bool:
        return any(tuple(argv[: len(prefix)]) == prefix for argv in self.argvs())


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def sandbox(tmp_path: Path, monkeypatch) -> Path:
    projects = tmp_path / "projects"
    sites = tmp_path / "sites"
    cert_dir = tmp_path / "certs"
    hosts_file = tmp_path / "hosts"
    hosts_file.write_text("127.0.0.1 localhost\n::1 localhost\n")
    cnf = tmp_path / "my.cnf"
    cnf.write_text("[client]\nuser=alice\npassword=secret\n")

    monkeypatch.setattr(workflow, "PROJECTS_DIR", str(projects))
    monkeypatch.setattr(workflow, "MYSQL_CNF", str(cnf))
    monkeypatch.setattr(apache, "APACHE_SITES_DIR", str(sites))
    monkeypatch.setattr(certs, "CERT_DIR", str(cert_dir))
    monkeypatch.setattr(hosts, "HOSTS_FILE", str(hosts_file))
    monkeypatch.setattr(github, "GITHUB_OWNER", "acme")
    monkeypatch.setattr(utils, "LOG_DIR", str(tmp_path / "log"))
    return tmp_path

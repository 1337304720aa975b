from pathlib import Path

import pytest

from provisioner import github, workflow
from provisioner.frameworks import FRAMEWORKS
from provisioner.project import derive_names
from provisioner.workflow import MODE_CLONE, MODE_DELETE, MODE_NEW, MODE_UPDATE, provision


def _never_asked(_prompt):
    raise AssertionError("prompt should not be shown")


def _project(sandbox: Path, folder: str) -> Path:
    return sandbox / "projects" / folder


@pytest.fixture
def provisioned_site(sandbox):
    names = derive_names("api.example.com")
    project = _project(sandbox, names.folder)
    (project / "public").mkdir(parents=True)
    (project / "public" / "index.php").write_text("<?php\n")
    vhost = sandbox / "sites" / f"{names.domain}.conf"
    vhost.parent.mkdir()
    vhost.write_text("<VirtualHost *:80>\n</VirtualHost>\n")
    hosts_file = sandbox / "hosts"
    hosts_file.write_text(
        "127.0.0.1 localhost\n"
        f"127.0.0.1 {names.domain} # provision\n"
        f"::1 {names.domain} # provision\n"
    )
    return names, project, vhost, hosts_file


@pytest.mark.parametrize("key", ["laravel", "wp"])
def test_update_is_a_noop(sandbox, fake_run, key):
    names = derive_names("api.example.com")
    assert provision(FRAMEWORKS[key], names, MODE_UPDATE, ask=_never_asked)
    assert fake_run.calls == []
    assert not (sandbox / "projects").exists()
    assert not (sandbox / "sites").exists()


@pytest.mark.parametrize("answer", ["n", "", "N", "maybe", "\n"])
def test_delete_aborts_without_confirmation(provisioned_site, fake_run, answer):
    names, project, vhost, hosts_file = provisioned_site
    hosts_before = hosts_file.read_text()
    assert provision(FRAMEWORKS["laravel"], names, MODE_DELETE, ask=lambda _p: answer)
    assert project.exists()
    assert vhost.exists()
    assert hosts_file.read_text() == hosts_before
    assert fake_run.calls == []


def test_delete_aborts_on_eof(provisioned_site, fake_run):
    names, project, _vhost, _hosts = provisioned_site

    def eof(_prompt):
        raise EOFError

    assert provision(FRAMEWORKS["wp"], names, MODE_DELETE, ask=eof)
    assert project.exists()


@pytest.mark.parametrize("answer", ["y", "Y", "yes"])
def test_delete_confirmed_removes_files_but_keeps_database(provisioned_site, fake_run, answer, capsys):
    names, project, vhost, hosts_file = provisioned_site
    assert provision(FRAMEWORKS["laravel"], names, MODE_DELETE, ask=lambda _p: answer)
    assert not project.exists()
    assert not vhost.exists()
    assert hosts_file.read_text() == "127.0.0.1 localhost\n"
    assert fake_run.argvs() == [
        ["sudo", "apachectl", "configtest"],
        ["sudo", "apachectl", "-k", "restart"],
    ]
    assert not fake_run.ran("mysql")
    assert "api_example_test kept" in capsys.readouterr().out


def test_delete_refuses_path_outside_projects_root(sandbox, fake_run, monkeypatch, tmp_path):
    names = derive_names("api.example.com")
    outside = tmp_path / "elsewhere"
    outside.mkdir()
    projects = sandbox / "projects"
    projects.mkdir()
    (projects / names.folder).symlink_to(outside, target_is_directory=True)
    assert not provision(FRAMEWORKS["wp"], names, MODE_DELETE, ask=lambda _p: "y")
    assert outside.exists()


def test_clone_repository_not_found(sandbox, fake_run, monkeypatch, capsys):
    monkeypatch.setattr(github, "repo_exists", lambda name, owner=None: False)
    names = derive_names("api.example.com")
    assert provision(FRAMEWORKS["laravel"], names, MODE_CLONE)
    out = capsys.readouterr().out
    assert "Repository acme/api.example not found" in out
    assert "--new" in out
    assert not fake_run.ran("git", "clone")
    assert not _project(sandbox, names.folder).exists()


def test_clone_lookup_error_fails(sandbox, fake_run, monkeypatch):
    import httpx

    def boom(name, owner=None):
        raise httpx.ConnectError("offline")

    monkeypatch.setattr(github, "repo_exists", boom)
    assert not provision(FRAMEWORKS["wp"], derive_names("api.example.com"), MODE_CLONE)
    assert fake_run.calls == []


def test_clone_found_provisions_wordpress_site(sandbox, fake_run, monkeypatch):
    seen = []
    monkeypatch.setattr(github, "repo_exists", lambda name, owner=None: seen.append(name) or True)
    names = derive_names("blog.example.com")
    project = _project(sandbox, names.folder)

    def fake_clone(argv, _cwd):
        dest = Path(argv[-1])
        dest.mkdir(parents=True)
        (dest / "composer.json").write_text("{}")

    fake_run.on("git", "clone", do=fake_clone)

    assert provision(FRAMEWORKS["wp"], names, MODE_CLONE)
    assert seen == ["blog.example"]
    argvs = fake_run.argvs()
    assert ["git", "clone", "git@github.com:acme/blog.example.git", str(project)] in argvs
    assert ["composer", "install"] in argvs
    assert fake_run.ran("mysql", "--user=alice", "-e", "CREATE DATABASE IF NOT EXISTS `blog_example_test`;")
    assert fake_run.ran("wp", "config", "create")
    assert fake_run.ran("mkcert")
    assert argvs[-2:] == [["sudo", "apachectl", "configtest"], ["sudo", "apachectl", "-k", "restart"]]

    vhost = (sandbox / "sites" / "blog.example.test.conf").read_text()
    assert f'DocumentRoot "{project}"' in vhost
    hosts_text = (sandbox / "hosts").read_text()
    assert "127.0.0.1 blog.example.test # provision" in hosts_text
    assert "::1 blog.example.test # provision" in hosts_text


def test_new_laravel_scaffolds_and_writes_env(sandbox, fake_run):
    names = derive_names("api.example.com")
    project = _project(sandbox, names.folder)

    def fake_create_project(argv, cwd):
        dest = Path(cwd) / argv[-1]
        dest.mkdir(parents=True)
        (dest / "composer.json").write_text("{}")
        (dest / "package.json").write_text("{}")
        (dest / ".env").write_text("APP_KEY=base64:x\nDB_DATABASE=laravel\nDB_USERNAME=root\nDB_PASSWORD=\n")

    fake_run.on("composer", "create-project", do=fake_create_project)

    assert provision(FRAMEWORKS["laravel"], names, MODE_NEW, ask=_never_asked)
    argvs = fake_run.argvs()
    assert argvs[:4] == [
        ["composer", "create-project", "laravel/laravel", "api-example-test"],
        ["git", "init"],
        ["git", "add", "-A"],
        ["git", "commit", "-m", "Initial commit"],
    ]
    assert ["npm", "install"] in argvs
    env = (project / ".env").read_text()
    assert "DB_DATABASE=api_example_test" in env
    assert "DB_USERNAME=alice" in env
    assert "DB_PASSWORD=secret" in env
    vhost = (sandbox / "sites" / "api.example.test.conf").read_text()
    assert f'DocumentRoot "{project / "public"}"' in vhost
    assert not fake_run.ran("git", "clone")


def test_new_wordpress_downloads_core(sandbox, fake_run):
    names = derive_names("blog.example.com")
    assert provision(FRAMEWORKS["wp"], names, MODE_NEW)
    assert _project(sandbox, names.folder).is_dir()
    assert fake_run.argvs()[0] == ["wp", "core", "download"]
    assert fake_run.ran("wp", "core", "install")


def test_new_refuses_existing_project(sandbox, fake_run):
    names = derive_names("api.example.com")
    _project(sandbox, names.folder).mkdir(parents=True)
    assert not provision(FRAMEWORKS["laravel"], names, MODE_NEW)
    assert fake_run.calls == []


def test_database_failure_is_tolerated(sandbox, fake_run):
    fake_run.fail_on("mysql")
    assert provision(FRAMEWORKS["wp"], derive_names("blog.example.com"), MODE_NEW)
    assert fake_run.ran("sudo", "apachectl", "-k", "restart")


def test_missing_credentials_stop_the_run(sandbox, fake_run, monkeypatch):
    monkeypatch.setattr(workflow, "MYSQL_CNF", str(sandbox / "absent.cnf"))
    assert not provision(FRAMEWORKS["wp"], derive_names("blog.example.com"), MODE_NEW)
    assert not fake_run.ran("mysql")
    assert not (sandbox / "sites").exists()


def test_failed_step_stops_before_site_registration(sandbox, fake_run):
    fake_run.fail_on("mkcert")
    assert not provision(FRAMEWORKS["wp"], derive_names("blog.example.com"), MODE_NEW)
    assert not (sandbox / "sites").exists()
    assert not fake_run.ran("sudo", "apachectl")


def test_delete_stops_before_restart_when_configtest_fails(provisioned_site, fake_run):
    names, project, vhost, _hosts = provisioned_site
    fake_run.fail_on("sudo", "apachectl", "configtest")
    assert not provision(FRAMEWORKS["laravel"], names, MODE_DELETE, ask=lambda _p: "y")
    assert not project.exists()
    assert not vhost.exists()
    assert not fake_run.ran("sudo", "apachectl", "-k", "restart")

"""Shared configuration constants for provision.

Centralizes paths, tools and defaults used by the provisioner modules.
Most values can be overridden through PROVISION_* environment variables.
"""
import os
from pathlib import Path

VERSION = "1.0.0"

HOME = Path.home()
PROJECTS_DIR = os.environ.get("PROVISION_PROJECTS_DIR", str(HOME / "projects"))
LOCAL_TLD = os.environ.get("PROVISION_TLD", "test")
LOG_DIR = os.environ.get("PROVISION_LOG_DIR", str(HOME / ".provision" / "log"))

# Upstream repositories
GITHUB_API = "https://api.github.com"
GITHUB_OWNER = os.environ.get("PROVISION_GITHUB_OWNER", "")
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN", "")
GITHUB_TIMEOUT = 15.0
GIT_CLONE_URL = "git@github.com:{owner}/{name}.git"

# Database
MYSQL_CNF = os.environ.get("PROVISION_MYSQL_CNF", str(HOME / ".my.cnf"))
MYSQL_BIN = "mysql"

# Apache (Homebrew httpd)
APACHE_SITES_DIR = os.environ.get(
    "PROVISION_APACHE_SITES_DIR", "/opt/homebrew/etc/httpd/sites"
)
APACHECTL = "apachectl"
CERT_DIR = os.environ.get("PROVISION_CERT_DIR", "/opt/homebrew/etc/httpd/certs")
MKCERT_BIN = "mkcert"

# Local DNS
HOSTS_FILE = os.environ.get("PROVISION_HOSTS_FILE", "/etc/hosts")
LOCALHOST_IP = "127.0.0.1"
LOCALHOST_IP6 = "::1"

# Toolchain
COMPOSER_BIN = "composer"
NPM_BIN = "npm"
PHP_BIN = "php"
WP_CLI_PATH = "wp"
LARAVEL_PACKAGE = "laravel/laravel"

DEFAULT_WP_USER = "admin"
DEFAULT_WP_PASS = "password"
DEFAULT_WP_EMAIL = "admin@localhost.test"

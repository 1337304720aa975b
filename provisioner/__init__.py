"""Local Laravel/WordPress site provisioning.

Submodules:
- project: name derivation (domain, folder, database)
- credentials: ~/.my.cnf [client] parsing
- database: MySQL schema creation
- github, git: upstream lookup and clone
- certs, apache, hosts: site registration
- frameworks: Laravel and WordPress adapters
- workflow: new / clone / update / delete orchestration
"""

# Intentionally minimal; logic lives in submodules and provision.py.

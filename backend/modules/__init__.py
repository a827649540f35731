"""
Feature modules for Keystone backend.

- auth: local accounts, bearer tokens, federated login, profiles
- todos: owner-scoped todo items behind the auth gate

Each module keeps its interfaces.py (Protocols), models.py, service.py,
repository.py (SQL only), routes.py and exceptions.py side by side.
Modules talk to each other through interfaces, never through another
module's repository.
"""

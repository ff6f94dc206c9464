"""RBAC directory admin console - authorization core and API."""

__version__ = "0.1.0"

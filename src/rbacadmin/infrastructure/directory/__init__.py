"""Directory API adapter."""

from rbacadmin.infrastructure.directory.http_client import HttpDirectoryClient

__all__ = ["HttpDirectoryClient"]

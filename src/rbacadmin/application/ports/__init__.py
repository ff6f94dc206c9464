"""Application ports - interfaces for external adapters."""

from rbacadmin.application.ports.directory_client import DirectoryClient
from rbacadmin.application.ports.navigator import Navigator

__all__ = [
    "DirectoryClient",
    "Navigator",
]

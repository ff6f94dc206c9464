"""Application DTOs."""

from rbacadmin.application.dto.access_decision import AccessDecision
from rbacadmin.application.dto.assignment_diff import AssignmentDiff
from rbacadmin.application.dto.dashboard_dto import DashboardStats, RoleShare
from rbacadmin.application.dto.directory_dto import (
    DirectorySnapshot,
    PermissionInput,
    RoleInput,
    UserInput,
)

__all__ = [
    "AccessDecision",
    "AssignmentDiff",
    "DashboardStats",
    "DirectorySnapshot",
    "PermissionInput",
    "RoleInput",
    "RoleShare",
    "UserInput",
]

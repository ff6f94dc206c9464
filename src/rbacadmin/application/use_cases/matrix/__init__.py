"""Role/permission assignment editing."""

from rbacadmin.application.use_cases.matrix.assignment_matrix import (
    AssignmentMatrixEditor,
    MatrixCell,
    MatrixRow,
    filter_permissions,
)
from rbacadmin.application.use_cases.matrix.role_permissions import RolePermissionsEditor

__all__ = [
    "AssignmentMatrixEditor",
    "MatrixCell",
    "MatrixRow",
    "RolePermissionsEditor",
    "filter_permissions",
]

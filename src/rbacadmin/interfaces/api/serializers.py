"""Response bodies for API resources."""

from typing import Any

from rbacadmin.application.dto import AccessDecision, AssignmentDiff, DashboardStats
from rbacadmin.application.use_cases.access import NavigationEntry
from rbacadmin.application.use_cases.matrix import AssignmentMatrixEditor
from rbacadmin.domain.entities import Permission


def decision_to_dict(decision: AccessDecision) -> dict[str, Any]:
    return {
        "state": decision.state.value,
        "reason": decision.reason.value if decision.reason else None,
        "missing": list(decision.missing),
        "redirect_to": decision.redirect_to,
    }


def entry_to_dict(entry: NavigationEntry) -> dict[str, Any]:
    return {"name": entry.name, "href": entry.href, "permission": entry.permission}


def permission_to_dict(permission: Permission) -> dict[str, Any]:
    return {
        "id": permission.id,
        "name": permission.name,
        "guard_name": permission.guard_name,
        "category": permission.category,
    }


def diff_to_dict(diff: AssignmentDiff) -> dict[str, Any]:
    return {
        "add": [{"role_id": k.role_id, "permission_id": k.permission_id} for k in diff.add],
        "revoke": [{"role_id": k.role_id, "permission_id": k.permission_id} for k in diff.revoke],
    }


def stats_to_dict(stats: DashboardStats) -> dict[str, Any]:
    return {
        "total_users": stats.total_users,
        "total_roles": stats.total_roles,
        "total_permissions": stats.total_permissions,
        "role_distribution": [
            {"role_id": s.role_id, "name": s.name, "count": s.count}
            for s in stats.nonzero_role_distribution()
        ],
    }


def matrix_to_dict(editor: AssignmentMatrixEditor, search_term: str = "") -> dict[str, Any]:
    groups: dict[str, list[dict[str, Any]]] = {}
    for row in editor.rows(search_term):
        groups.setdefault(row.category, []).append({
            "permission": permission_to_dict(row.permission),
            "cells": [
                {"role_id": c.role_id, "granted": c.granted, "pending": c.pending}
                for c in row.cells
            ],
        })
    return {
        "snapshot_version": editor.snapshot_version,
        "pending_count": editor.pending_count,
        "has_unsaved_changes": editor.has_unsaved_changes,
        "roles": [{"id": r.id, "name": r.name} for r in editor.roles],
        "groups": [{"category": c, "rows": rows} for c, rows in groups.items()],
    }

"""Dashboard statistics computed from a directory snapshot."""

from rbacadmin.application.dto import DashboardStats, DirectorySnapshot, RoleShare


def compute_dashboard_stats(snapshot: DirectorySnapshot) -> DashboardStats:
    """Totals plus, per role, how many users hold it."""
    distribution = tuple(
        RoleShare(
            role_id=role.id,
            name=role.name,
            count=sum(1 for user in snapshot.users if user.has_role(role.id)),
        )
        for role in snapshot.roles
    )
    return DashboardStats(
        total_users=len(snapshot.users),
        total_roles=len(snapshot.roles),
        total_permissions=len(snapshot.permissions),
        role_distribution=distribution,
    )

from rbacadmin.application.use_cases.dashboard.dashboard_stats import compute_dashboard_stats

__all__ = ["compute_dashboard_stats"]

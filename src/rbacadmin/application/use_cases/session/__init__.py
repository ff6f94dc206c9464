from rbacadmin.application.use_cases.session.load_session import SessionLoader

__all__ = ["SessionLoader"]

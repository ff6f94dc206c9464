"""Application entry point and composition root."""

import logging

from rbacadmin import __version__
from rbacadmin.config import Settings, get_settings
from rbacadmin.infrastructure.directory import HttpDirectoryClient
from rbacadmin.interfaces.api.app import create_app

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_rbacadmin_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()

    def client_factory(token: str | None) -> HttpDirectoryClient:
        return HttpDirectoryClient(
            base_url=settings.directory_api_url,
            token=token,
            timeout=settings.directory_timeout,
        )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        client_factory,
        sign_in_path=settings.sign_in_path,
        cors_origins=cors_origins,
        directory_api_url=settings.directory_api_url,
    )


def main() -> None:
    """CLI entry point - run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    logger.info("rbacadmin v%s (%s)", __version__, settings.environment)
    uvicorn.run(
        create_rbacadmin_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from forum_notifications.config import Settings, get_settings
from forum_notifications.infrastructure.database import SessionLocal, engine, initialize_database
from forum_notifications.infrastructure.repositories import SqlAlchemyPreferenceStorage
from forum_notifications.interfaces.api.dependencies import NotificationServices, build_services
from forum_notifications.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, *, services: NotificationServices | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``services`` replaces the forum-backed pipeline, which is how tests plug
    in fake sources and in-memory storage.
    """

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Prepare storage and the notification pipeline, then release them on shutdown."""

        logging.basicConfig(level=settings.log_level.upper())
        pipeline = services
        if pipeline is None:
            initialize_database()
            pipeline = build_services(
                settings, storage=SqlAlchemyPreferenceStorage(SessionLocal)
            )
        app.state.notification_services = pipeline
        await pipeline.startup()
        logger.info("Notification pipeline started for %s", settings.forum_base_url)
        try:
            yield
        finally:
            await pipeline.shutdown()
            app.state.notification_services = None
            if services is None:
                engine.dispose()

    app = FastAPI(title="Forum notifications", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()

from fastapi import FastAPI

from app.connections import build_context, mongo_lifespan
from app.api.user import router as user_router
from app.api.todo import router as todo_router
from app.utils.config import Settings, settings as default_settings
from app.utils.errors import register_exception_handlers
from app.utils.logging import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API around an explicitly constructed context.

    The MongoDB connection is opened by the lifespan, so callers that manage
    their own connection (tests) can skip it.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title="Todo API (Mongo)", version="0.1.0", lifespan=mongo_lifespan, debug=settings.debug)
    app.state.context = build_context(settings)
    register_exception_handlers(app)

    @app.get("/")
    def health() -> dict:
        return {"status": "ok", "app": settings.app_name}

    app.include_router(user_router, prefix="/users")
    app.include_router(todo_router, prefix="/todos")
    return app


app = create_app()
